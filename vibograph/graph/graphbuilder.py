# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
from collections.abc import Iterable, Mapping

from vibograph.graph.graph import EMPTY_LAYOUT, Commit, GraphLayout
from vibograph.graph.graphweaver import GraphWeaver
from vibograph.toolbox import Benchmark

logger = logging.getLogger(__name__)


class GraphBuildLoop:
    def __init__(self):
        self.weaver = GraphWeaver()
        self.layout = EMPTY_LAYOUT

    def sendAll(self, sequence: Iterable):
        sequence = list(sequence)
        self.weaver.prescan(sequence)

        gen = self.coBuild()
        gen.send(None)  # prime it
        for c in sequence:
            gen.send(c)
        gen.close()

        self.layout = self.weaver.finish()
        return self

    def coBuild(self):
        weaver = self.weaver

        while True:
            try:
                commit = yield
            except GeneratorExit:
                break

            weaver.newCommit(commit)

        logger.debug(f"Laid out {len(weaver.rows)} rows, peak lane count: {weaver.peakLaneCount}")


def buildGraph(commits: Iterable) -> GraphLayout:
    """
    Compute the graph layout for a sequence of commits.

    The commits must come in `git log` order (children before parents).
    Parents that don't appear in the sequence (truncated history) are
    tolerated: their lanes stay open until the end of the graph.

    Items may be Commit-like objects or raw `log` payloads
    ({"hash": ..., "parents": [...]}), which go through Commit.fromJson.

    Every call starts from scratch; nothing is shared between calls.
    """

    commits = [Commit.fromJson(c) if isinstance(c, Mapping) else c for c in commits]
    if not commits:
        return EMPTY_LAYOUT

    with Benchmark("buildGraph"):
        return GraphBuildLoop().sendAll(commits).layout
