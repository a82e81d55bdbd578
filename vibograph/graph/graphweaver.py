# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable

from vibograph.graph.coloridentity import ColorIdentityTracker
from vibograph.graph.edgebuilder import EdgeBuilder
from vibograph.graph.forbiddenlanes import ForbiddenLaneAnalyzer
from vibograph.graph.graph import ActiveLane, GraphLayout, GraphRow, Hash, parentsOf
from vibograph.graph.laneallocator import LaneAllocator
from vibograph.settings import DEVDEBUG


class GraphWeaver:
    """
    Lays out commits one row at a time.

    A GraphWeaver holds all the bookkeeping for a single layout pass and
    must be thrown away afterwards. Feed it the commits in the order they
    come out of `git log` (children before parents).
    """

    allocator: LaneAllocator
    colors: ColorIdentityTracker
    forbiddenLanes: ForbiddenLaneAnalyzer
    rows: list[GraphRow]
    referencedParents: set[Hash]
    maxLane: int

    def __init__(self):
        self.allocator = LaneAllocator()
        self.colors = ColorIdentityTracker()
        self.forbiddenLanes = ForbiddenLaneAnalyzer()
        self.rows = []
        self.referencedParents = set()
        self.maxLane = 0

    def prescan(self, commits: Iterable):
        """
        Index parent/child relationships across the whole sequence.
        Must be called before the first newCommit.
        """
        commits = list(commits)
        self.forbiddenLanes.prescan(commits)
        for commit in commits:
            self.referencedParents.update(parentsOf(commit))

    def newCommit(self, commit) -> GraphRow:
        allocator = self.allocator
        colors = self.colors
        me = commit.hash
        myParents = parentsOf(commit)
        rowIndex = len(self.rows)

        # Pick a lane for this commit
        myLane = allocator.reservedLane(me)
        if myLane >= 0:
            # A child has reserved a lane for me (I'm its first parent,
            # or a merge parent that got a branch-out lane).
            myColor = colors.claim(me)
        else:
            # Nobody was looking for me, so I'm the tip of a new branch.
            forbidden = self.forbiddenLanes.computeForbiddenLanes(me, rowIndex, self.rows)
            myLane = allocator.findFreeLane(forbidden)
            myColor = colors.newColor()

        allocator.occupy(myLane, me)
        colors.assign(me, myColor)

        edges = EdgeBuilder(myLane)

        if not myParents:
            # Root commit: nothing to wait for below
            allocator.free(myLane)
        else:
            firstParent = myParents[0]

            if not allocator.isReserved(firstParent):
                # Straight branch: first parent continues in my lane, in my color
                allocator.reserve(firstParent, myLane)
                colors.assign(firstParent, myColor)
            else:
                # First parent already waits in another lane: join it there
                edges.mergeIn(allocator.reservedLane(firstParent), myColor)
                allocator.free(myLane)

            for parent in myParents[1:]:
                if not allocator.isReserved(parent):
                    newLane = allocator.findFreeLane()
                    allocator.reserve(parent, newLane)
                    parentColor = colors.newColor()
                    colors.assign(parent, parentColor)
                    edges.branchOut(newLane, parentColor)
                else:
                    parentLane = allocator.reservedLane(parent)
                    parentColor = colors.colorOf(parent, myColor)
                    edges.mergeIn(parentLane, parentColor)

        edges.passThrough(allocator, colors)

        self.maxLane = max(self.maxLane, myLane)

        row = GraphRow(
            commit=commit,
            lane=myLane,
            colorId=myColor,
            edges=edges.seal(),
            hasParents=len(myParents) > 0,
            hasChildren=me in self.referencedParents)

        self.rows.append(row)
        self.forbiddenLanes.registerRow(me, rowIndex)
        return row

    def activeLanes(self) -> list[ActiveLane]:
        activeLanes = [ActiveLane(lane, self.colors.colorOf(owner, 0))
                       for lane, owner in self.allocator.openLanes()]

        # History ends at a root: keep the last row's lane going so that
        # continuation lines still extend past the last commit.
        if not activeLanes and self.rows:
            lastRow = self.rows[-1]
            activeLanes.append(ActiveLane(lastRow.lane, lastRow.colorId))

        return activeLanes

    def finish(self) -> GraphLayout:
        if DEVDEBUG:
            numLanes = len(self.allocator)
            for row in self.rows:
                assert 0 <= row.lane <= self.maxLane
                assert all(0 <= e.fromLane < numLanes and 0 <= e.toLane < numLanes for e in row.edges)

        return GraphLayout(
            rows=tuple(self.rows),
            maxLane=self.maxLane,
            activeLanes=tuple(self.activeLanes()))

    @property
    def peakLaneCount(self):
        return self.allocator.peakLaneCount
