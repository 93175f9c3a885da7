"""Tests for the n-ary reduction tree layout."""

import pytest

from descent import ceil_div
from tree_layout import TreeLayout


def ceil_log(base_width, arity):
    depth = 0
    while arity ** depth < base_width:
        depth += 1
    return depth


@pytest.mark.parametrize(
    "arity, size, depth",
    [(2, 11, 4), (3, 7, 3), (4, 4, 2), (5, 3, 2), (9, 3, 2), (10, 1, 1), (16, 1, 1)],
)
def test_size_and_depth_base_10(arity, size, depth):
    layout = TreeLayout(10, arity)
    assert layout.vector_size() == size
    assert layout.depth() == depth


@pytest.mark.parametrize("base_width", [0, 1])
def test_degenerate_tree_has_no_units(base_width):
    layout = TreeLayout(base_width, 4)

    assert layout.vector_size() == 0
    assert layout.depth() == 0
    assert layout.layers() == []
    assert layout.unit_width(0) == 0
    assert layout.unit_input_address(0, 0) is None
    assert layout.unit_output_address(0) is None


@pytest.mark.parametrize("arity", [1, 0])
def test_rejects_small_arity(arity):
    with pytest.raises(ValueError):
        TreeLayout(10, arity)


def test_layers_base_10_arity_4():
    layers = TreeLayout(10, 4).layers()

    assert [layer.remaining for layer in layers] == [10, 3]
    assert [layer.units for layer in layers] == [3, 1]
    assert [layer.inputs_before for layer in layers] == [0, 10]


@pytest.mark.parametrize(
    "arity, widths",
    [
        (2, [2, 2, 2, 2, 2, 2, 2, 1, 2, 1, 2]),
        (3, [3, 3, 3, 1, 3, 1, 2]),
        (4, [4, 4, 2, 3]),
    ],
)
def test_unit_widths_base_10(arity, widths):
    layout = TreeLayout(10, arity)
    assert [layout.unit_width(u) for u in range(layout.vector_size())] == widths


def test_unit_width_out_of_range_is_zero():
    layout = TreeLayout(10, 4)
    assert layout.unit_width(4) == 0
    assert layout.unit_width(-1) == 0


def test_unit_depth_base_10_arity_2():
    layout = TreeLayout(10, 2)
    depths = [layout.unit_depth(u) for u in range(12)]
    assert depths == [0, 0, 0, 0, 0, 1, 1, 1, 2, 2, 3, 4]


def test_input_addresses_base_10_arity_3():
    layout = TreeLayout(10, 3)
    table = [[layout.unit_input_address(u, s) for s in range(3)] for u in range(7)]

    assert table == [
        [0, 1, 2],
        [3, 4, 5],
        [6, 7, 8],
        [9, None, None],
        [10, 11, 12],
        [13, None, None],
        [14, 15, None],
    ]


def test_input_addresses_base_10_arity_2():
    layout = TreeLayout(10, 2)
    table = [
        [layout.unit_input_address(u, s) for s in range(layout.unit_width(u))]
        for u in range(layout.vector_size())
    ]

    assert table[5:] == [[10, 11], [12, 13], [14], [15, 16], [17], [18, 19]]


def test_out_of_range_queries_return_none():
    layout = TreeLayout(10, 4)

    assert layout.unit_input_address(2, 2) is None
    assert layout.unit_input_address(0, 4) is None
    assert layout.unit_input_address(0, -1) is None
    assert layout.unit_input_address(4, 0) is None
    assert layout.unit_output_address(4) is None


def test_output_addresses_base_10_arity_3():
    layout = TreeLayout(10, 3)
    outputs = [layout.unit_output_address(u) for u in range(7)]

    assert outputs == [10, 11, 12, 13, 14, 15, 16]
    assert layout.address_count() == 17


@pytest.mark.parametrize("base_width", [2, 3, 10, 27, 64, 100])
@pytest.mark.parametrize("arity", [2, 3, 4, 8])
def test_every_output_is_read_once(base_width, arity):
    layout = TreeLayout(base_width, arity)
    reads = []
    for unit in range(layout.vector_size()):
        for slot in range(layout.unit_width(unit)):
            reads.append(layout.unit_input_address(unit, slot))

    # Everything but the root output is consumed exactly once
    assert sorted(reads) == list(range(layout.address_count() - 1))


@pytest.mark.parametrize("base_width", [2, 5, 10, 17, 81])
@pytest.mark.parametrize("arity", [2, 3, 4, 9])
def test_size_and_depth_match_closed_forms(base_width, arity):
    layout = TreeLayout(base_width, arity)

    expected_size = 0
    width = base_width
    while width > 1:
        width = ceil_div(width, arity)
        expected_size += width

    assert layout.vector_size() == expected_size
    assert layout.depth() == ceil_log(base_width, arity)


def test_address_depth_base_10_arity_4():
    layout = TreeLayout(10, 4)

    assert [layout.address_depth(a) for a in range(10)] == [0] * 10
    assert [layout.address_depth(a) for a in (10, 11, 12)] == [1, 1, 1]
    assert layout.address_depth(13) == 2
    assert layout.address_depth(14) is None
    assert layout.address_depth(-1) is None


def test_address_depth_single_input():
    assert TreeLayout(1, 4).address_depth(0) == 0
    assert TreeLayout(1, 4).address_depth(1) is None
    assert TreeLayout(0, 4).address_depth(0) is None


@pytest.mark.parametrize(
    "latency, expected", [(1, 10), (2, 4), (3, 3), (4, 2), (7, 2)]
)
def test_unit_width_for_latency_base_10(latency, expected):
    assert TreeLayout.unit_width_for_latency(10, latency) == expected


@pytest.mark.parametrize("base_width", [2, 9, 10, 64, 100])
@pytest.mark.parametrize("latency", [1, 2, 3])
def test_unit_width_for_latency_is_minimal(base_width, latency):
    arity = TreeLayout.unit_width_for_latency(base_width, latency)

    assert TreeLayout(base_width, arity).depth() <= latency
    if arity > 2:
        assert TreeLayout(base_width, arity - 1).depth() > latency


def test_unit_width_for_latency_rejects_zero_latency():
    with pytest.raises(ValueError):
        TreeLayout.unit_width_for_latency(10, 0)


def test_for_latency_builds_layout():
    layout = TreeLayout.for_latency(64, 2)
    assert layout.unit_arity == 8
    assert layout.depth() == 2


def test_print_stats(capsys):
    TreeLayout(10, 4).print_stats()
    out = capsys.readouterr().out

    assert "Depth (latency): 2" in out
    assert "Layer 0: 3 units, widths [4, 4, 2]" in out
    assert "Layer 1: 1 units, widths [3]" in out
