# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from vibograph.graph.graph import (
    ActiveLane,
    Commit,
    Edge,
    EdgeType,
    EMPTY_LAYOUT,
    GraphLayout,
    GraphRow,
    Hash,
    parentsOf,
)
from vibograph.graph.coloridentity import ColorIdentityTracker
from vibograph.graph.laneallocator import LaneAllocator
from vibograph.graph.forbiddenlanes import ForbiddenLaneAnalyzer
from vibograph.graph.edgebuilder import EdgeBuilder
from vibograph.graph.graphweaver import GraphWeaver
from vibograph.graph.graphbuilder import GraphBuildLoop, buildGraph
from vibograph.graph.graphdiagram import GraphDiagram
