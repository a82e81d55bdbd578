# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Set

from vibograph.graph.graph import Hash

logger = logging.getLogger(__name__)


class LaneAllocator:
    """
    Keeps track of which lanes are open, and who owns them.

    lanes[i] holds the hash of the commit that lane i is waiting for,
    or None if the lane is free. Lanes are never removed; a freed lane
    may be handed out again to another branch further down the graph.
    """

    lanes: list[Hash | None]
    hashToLane: dict[Hash, int]
    peakLaneCount: int

    def __init__(self):
        self.lanes = []
        self.hashToLane = {}
        self.peakLaneCount = 0

    def __len__(self):
        return len(self.lanes)

    def reservedLane(self, hash_: Hash) -> int:
        """ Lane reserved for this commit by a child, or -1 if there's none. """
        return self.hashToLane.get(hash_, -1)

    def isReserved(self, hash_: Hash) -> bool:
        return hash_ in self.hashToLane

    def _appendLane(self) -> int:
        self.lanes.append(None)
        self.peakLaneCount = max(self.peakLaneCount, len(self.lanes))
        return len(self.lanes) - 1

    def findFreeLane(self, forbidden: Set[int] = frozenset()) -> int:
        """
        Pick the leftmost free lane that isn't forbidden.
        Allocate a new lane on the right if there's no such lane.
        """
        for lane, owner in enumerate(self.lanes):
            if owner is None and lane not in forbidden:
                return lane
        return self._appendLane()

    def occupy(self, lane: int, hash_: Hash):
        """ Mark the lane as owned by the given commit. """
        self.lanes[lane] = hash_
        self.hashToLane[hash_] = lane

    def reserve(self, hash_: Hash, lane: int):
        """ Hand off the lane to a commit that hasn't appeared yet. """
        self.lanes[lane] = hash_
        self.hashToLane[hash_] = lane

    def free(self, lane: int):
        self.lanes[lane] = None

    def openLanes(self):
        """ Yield (lane, owner) for each open lane, from left to right. """
        for lane, owner in enumerate(self.lanes):
            if owner is not None:
                yield lane, owner
