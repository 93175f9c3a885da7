#!/usr/bin/env python3
"""Generate address tables for ladder/tree testbenches"""

import argparse
import os
import sys

from ladder_layout import LadderLayout
from tree_layout import TreeLayout

FAMILIES = {"ladder": LadderLayout, "tree": TreeLayout}


def address_width(layout):
    """Bits needed so the all-ones value is never a real address"""
    total = layout.base_width + layout.vector_size()
    return max(1, total.bit_length())


def layout_depth(layout):
    if isinstance(layout, TreeLayout):
        return layout.depth()
    return layout.vector_size()


def address_table(layout):
    """
    Flatten the wiring of a layout into one address per (unit, slot)

    Units are listed in flat order, each with unit_arity slots. Slots a unit
    does not use hold the all-ones invalid address.
    """
    invalid = (1 << address_width(layout)) - 1
    table = []
    for unit in range(layout.vector_size()):
        for slot in range(layout.unit_arity):
            address = layout.unit_input_address(unit, slot)
            table.append(invalid if address is None else address)
    return table


def generate_test_data(layout, output_dir="./data"):
    """Write addr.hex and width.hex for a layout"""
    os.makedirs(output_dir, exist_ok=True)

    digits = (address_width(layout) + 3) // 4
    addresses = address_table(layout)
    widths = [layout.unit_width(unit) for unit in range(layout.vector_size())]

    def write_hex(filename, values, pad):
        path = os.path.join(output_dir, filename)
        with open(path, "w") as f:
            for val in values:
                f.write(f"{val:0{pad}x}\n")

    write_hex("addr.hex", addresses, digits)
    write_hex("width.hex", widths, 1)

    print(f"Generated {len(addresses)} addresses for {len(widths)} units")
    print(f"Files written to {output_dir}\n")
    for unit in range(min(5, len(widths))):
        row = addresses[unit * layout.unit_arity:(unit + 1) * layout.unit_arity]
        print(f"Unit {unit}: width={widths[unit]} inputs={row}")


def export_defines(layout, header_dir):
    # generate tb/top.h
    os.makedirs(header_dir, exist_ok=True)
    header_path = os.path.join(header_dir, "top.h")

    width = address_width(layout)
    with open(header_path, "w") as f:
        f.write(f"`define BASE_WIDTH {layout.base_width}\n")
        f.write(f"`define UNIT_ARITY {layout.unit_arity}\n")
        f.write(f"`define UNIT_COUNT {layout.vector_size()}\n")
        f.write(f"`define DEPTH {layout_depth(layout)}\n")
        f.write(f"`define ADDR_WIDTH {width}\n")
        f.write(f"`define ADDR_INVALID {width}'h{(1 << width) - 1:x}\n")

    print(f"Header file written to: {header_path}")
    return header_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate layout address tables")
    parser.add_argument(
        "-f",
        "--family",
        type=str,
        default="tree",
        choices=sorted(FAMILIES),
        help="Layout family (default: tree)",
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
        "-o",
        "--output",
        type=str,
        default="data/",
        help="Output directory (default: data/)",
    )
    parser.add_argument(
        "-r",
        "--header",
        type=str,
        default="tb/",
        help="Output directory to store top.h header file",
    )

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

    generate_test_data(layout, args.output)
    export_defines(layout, args.header)


if __name__ == "__main__":
    main()
