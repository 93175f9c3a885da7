#!/usr/bin/env python3
"""
Layout Visualizer
Prints the wiring table of a ladder or tree layout with rich
"""

import argparse
import sys

from rich.console import Console
from rich.table import Table

from ladder_layout import LadderLayout
from tree_layout import TreeLayout

FAMILIES = {"ladder": LadderLayout, "tree": TreeLayout}


def unit_rows(layout):
    """(unit, depth, width, input addresses, output address) for every unit"""
    rows = []
    for unit in range(layout.vector_size()):
        if isinstance(layout, TreeLayout):
            depth = layout.unit_depth(unit)
        else:
            # Every ladder unit is one stage behind the unit it reads
            depth = unit
        width = layout.unit_width(unit)
        inputs = [layout.unit_input_address(unit, slot) for slot in range(width)]
        rows.append((unit, depth, width, inputs, layout.unit_output_address(unit)))
    return rows


def build_table(layout):
    kind = "Ladder" if isinstance(layout, LadderLayout) else "Tree"
    table = Table(
        title=f"{kind} layout: base {layout.base_width}, arity {layout.unit_arity}"
    )
    table.add_column("unit", justify="right")
    table.add_column("depth", justify="right")
    table.add_column("width", justify="right")
    table.add_column("inputs")
    table.add_column("output", justify="right")

    for unit, depth, width, inputs, output in unit_rows(layout):
        # Highlight reads from earlier unit outputs
        cells = [
            f"[blue]{address}[/blue]" if address >= layout.base_width else str(address)
            for address in inputs
        ]
        table.add_row(str(unit), str(depth), str(width), " ".join(cells), str(output))
    return table


def visualize_layout(layout, console=None):
    """Print the layout table, returns the console used"""
    if console is None:
        console = Console(record=True, soft_wrap=True)

    console.print(build_table(layout))
    console.print("[blue]blue[/blue] = output of an earlier unit")
    if layout.vector_size() == 0:
        console.print("[bold]No units needed[/bold]")
    return console


def main(argv=None):
    parser = argparse.ArgumentParser(description="Ladder/Tree Layout Visualizer")
    parser.add_argument(
        "-f",
        "--family",
        type=str,
        default="tree",
        choices=sorted(FAMILIES),
        help="Layout family",
    )
    parser.add_argument(
        "-w", "--width", type=int, required=True, help="Number of raw inputs"
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-a", "--arity", type=int, help="Maximum unit arity")
    group.add_argument(
        "-l", "--latency", type=int, help="Maximum latency, picks the smallest arity"
    )
    parser.add_argument(
        "-o", "--output", type=str, default=None, help="Also export as plain text"
    )
    parser.add_argument("--stats", action="store_true", help="Print statistics")

    args = parser.parse_args(argv)
    family = FAMILIES[args.family]

    try:
        if args.latency is not None:
            layout = family.for_latency(args.width, args.latency)
        else:
            layout = family(args.width, args.arity)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    if args.stats:
        layout.print_stats()

    console = visualize_layout(layout)

    if args.output:
        with open(args.output, "w") as f:
            f.write(console.export_text())
        print(f"Layout table written to: {args.output}")


if __name__ == "__main__":
    main()
