# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import json
import logging
import sys
from argparse import ArgumentParser


def makeArgParser():
    from vibograph.appconsts import APP_DISPLAY_NAME, APP_VERSION

    parser = ArgumentParser(prog="vibograph", description=f"{APP_DISPLAY_NAME} {APP_VERSION} - commit graph layout")
    parser.add_argument("repo", nargs="?", default=".", help="Path to the repository (default: current directory)")
    parser.add_argument("-n", "--max-commits", type=int, default=-1,
                        help="Number of commits to lay out (0: entire history; default: from prefs)")
    parser.add_argument("-b", "--branch", default="", help="Only walk this revision instead of all refs")
    parser.add_argument("--chronological", action="store_true", help="Order commits by date within the topology")
    parser.add_argument("--json", action="store_true", help="Dump the layout as JSON instead of a text diagram")
    parser.add_argument("--test-mode", action="store_true", help="Don't touch real user prefs")
    parser.add_argument("--debug", action="store_true", help="Enable expensive assertions and verbose logging")
    return parser


def main(argv=None):
    args = makeArgParser().parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.WARNING,
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")

    from vibograph import settings

    if args.test_mode:
        settings.TEST_MODE = True
    if args.debug:
        settings.DEVDEBUG = True

    settings.prefs.load()
    settings.applyLoggingLevel()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    from vibograph.commitsource import CommitSourceError, loadCommits
    from vibograph.graph import GraphDiagram, buildGraph

    maxCommits = args.max_commits if args.max_commits >= 0 else settings.prefs.maxCommits
    chronological = args.chronological or settings.prefs.chronologicalOrder

    try:
        commits = loadCommits(args.repo, limit=maxCommits, branch=args.branch, chronological=chronological)
    except CommitSourceError as exc:
        logging.getLogger(__name__).error(str(exc))
        return 1

    layout = buildGraph(commits)

    if args.json:
        json.dump(layout.toJson(), sys.stdout, indent=1)
        sys.stdout.write("\n")
    elif layout.isEmpty():
        print("No commits.")
    else:
        print(GraphDiagram.diagram(layout, verbose=args.debug))

    return 0


if __name__ == "__main__":
    sys.exit(main())
