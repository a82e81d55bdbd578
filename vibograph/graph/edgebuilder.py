# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from vibograph.graph.coloridentity import ColorIdentityTracker
from vibograph.graph.graph import Edge, EdgeType
from vibograph.graph.laneallocator import LaneAllocator


class EdgeBuilder:
    """ Accumulates the connector edges of a single row. """

    def __init__(self, homeLane: int):
        self.homeLane = homeLane
        self.edges = []

    def mergeIn(self, toLane: int, colorId: int):
        if toLane == self.homeLane:
            return
        self.edges.append(Edge(EdgeType.MERGE_IN, self.homeLane, toLane, colorId))

    def branchOut(self, toLane: int, colorId: int):
        self.edges.append(Edge(EdgeType.BRANCH_OUT, self.homeLane, toLane, colorId))

    def passThrough(self, allocator: LaneAllocator, colors: ColorIdentityTracker):
        """
        Draw a vertical line for every lane that stays open across this row,
        except the row's own lane (the commit's stubs take care of that one).
        """
        for lane, owner in allocator.openLanes():
            if lane == self.homeLane:
                continue
            colorId = colors.colorOf(owner, 0)
            self.edges.append(Edge(EdgeType.VERTICAL, lane, lane, colorId))

    def seal(self) -> tuple[Edge, ...]:
        return tuple(self.edges)
