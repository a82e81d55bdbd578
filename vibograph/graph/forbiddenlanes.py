# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import collections
from collections.abc import Iterable, Sequence

from vibograph.graph.graph import GraphRow, Hash, parentsOf


class ForbiddenLaneAnalyzer:
    """
    Finds lanes that a new branch head must not take over.

    When a commit is merged into a branch (as a non-first parent), the merge
    edge has to travel down to the row where that commit eventually appears.
    If a lane in that vertical corridor were handed to an unrelated branch
    head, its line would cross the merge edge. So, every lane occupied
    between the topmost merge child and the current row is off-limits.
    """

    mergeChildrenOf: dict[Hash, list[Hash]]
    "Commits that list a given hash as a non-first parent."

    hashToRow: dict[Hash, int]
    "Row index of every commit laid out so far."

    def __init__(self):
        self.mergeChildrenOf = collections.defaultdict(list)
        self.hashToRow = {}

    def prescan(self, commits: Iterable):
        for commit in commits:
            for parent in parentsOf(commit)[1:]:
                self.mergeChildrenOf[parent].append(commit.hash)

    def registerRow(self, hash_: Hash, rowIndex: int):
        # With duplicate hashes, keep the topmost row.
        self.hashToRow.setdefault(hash_, rowIndex)

    def computeForbiddenLanes(self, hash_: Hash, rowIndex: int, rows: Sequence[GraphRow]) -> set[int]:
        forbidden = set()

        mergeChildren = self.mergeChildrenOf.get(hash_)
        if not mergeChildren:
            return forbidden

        topRow = rowIndex
        for child in mergeChildren:
            childRow = self.hashToRow.get(child, rowIndex)
            topRow = min(topRow, childRow)

        for row in rows[topRow:rowIndex]:
            forbidden.add(row.lane)
            for edge in row.edges:
                forbidden.add(edge.fromLane)
                forbidden.add(edge.toLane)

        return forbidden
