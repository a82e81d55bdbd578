# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

if __name__ == '__main__':
    from vibograph.graph import *
    from argparse import ArgumentParser

    parser = ArgumentParser(description="vibograph ASCII graph tool")
    parser.add_argument("definition", help="Graph definition (e.g.: \"u:z i:b m:a,b a:z b-c:z z\")", nargs="+")
    parser.add_argument("-n", "--max-rows", type=int, default=-1)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    definition = " ".join(args.definition)
    try:
        sequence, heads = GraphDiagram.parseDefinition(definition)
    except ValueError as exc:
        parser.error(str(exc))

    layout = buildGraph(sequence)

    if args.verbose:
        print("Heads:", " ".join(sorted(heads)))
        print("Max lane:", layout.maxLane)
        print("Active lanes:", ", ".join(f"{al.lane} (c{al.colorId})" for al in layout.activeLanes))

    print(GraphDiagram.diagram(layout, maxRows=args.max_rows, verbose=args.verbose))
