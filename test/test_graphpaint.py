# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import pytest

from vibograph import colors
from vibograph.graph import *
from vibograph.graphpaint import *
from vibograph.qt import *
from vibograph.settings import VIEW_MODE_CONFIG, ViewMode

COMPACT = VIEW_MODE_CONFIG[ViewMode.COMPACT]


def startOf(path: QPainterPath) -> QPointF:
    e = path.elementAt(0)
    return QPointF(e.x, e.y)


def testVerticalEdgeSpansRow():
    path = edgePath(Edge(EdgeType.VERTICAL, 1, 1, 0), COMPACT, top=64)
    assert startOf(path) == QPointF(36, 64)
    assert path.currentPosition() == QPointF(36, 96)


def testMergeInGoesFromBulletToBottomOfTargetLane():
    path = edgePath(Edge(EdgeType.MERGE_IN, 2, 0, 3), COMPACT)
    assert startOf(path) == QPointF(52, 16)
    assert path.currentPosition() == QPointF(20, 32)
    assert path.boundingRect() == QRectF(20, 16, 32, 16)

    # Goes straight down before turning the corner
    e = path.elementAt(1)
    assert (e.x, e.y) == (52, 32 - CORNER_RADIUS)


def testBranchOutLeavesBulletHorizontally():
    path = edgePath(Edge(EdgeType.BRANCH_OUT, 0, 1, 3), COMPACT)
    assert startOf(path) == QPointF(20, 16)
    assert path.currentPosition() == QPointF(36, 32)

    e = path.elementAt(1)
    assert (e.x, e.y) == (36 - CORNER_RADIUS, 16)


def testBranchOutToTheLeft():
    path = branchOutPath(60, 10, 20, 40)
    e = path.elementAt(1)
    assert (e.x, e.y) == (20 + CORNER_RADIUS, 10)
    assert path.currentPosition() == QPointF(20, 40)


def testCornerRadiusShrinksInTightSpaces():
    path = mergeInPath(0, 0, 4, 20)
    e = path.elementAt(1)
    assert (e.x, e.y) == (0, 18)


def testConnectorInSameColumnIsStraight():
    for builder in mergeInPath, branchOutPath:
        path = builder(10, 0, 10, 20)
        assert path.elementCount() == 2
        assert path.currentPosition() == QPointF(10, 20)


def testRowPathsIncludeStubs():
    """
    Row 2 in compact mode: top=64, bullet at y=80, bottom=96.
    """
    row = GraphRow(
        Commit("a", ("b",)), lane=1, colorId=7,
        edges=(Edge(EdgeType.VERTICAL, 0, 0, 2),),
        hasParents=True, hasChildren=True)

    paths = rowPaths(row, 2, COMPACT)
    assert [colorId for _, colorId in paths] == [2, 7, 7]

    upperStub, lowerStub = paths[1][0], paths[2][0]
    assert startOf(upperStub) == QPointF(36, 64)
    assert upperStub.currentPosition() == QPointF(36, 80)
    assert startOf(lowerStub) == QPointF(36, 80)
    assert lowerStub.currentPosition() == QPointF(36, 96)


def testLoneCommitHasNoStubs():
    row = GraphRow(Commit("a"), lane=0, colorId=0, edges=(), hasParents=False, hasChildren=False)
    assert rowPaths(row, 0, COMPACT) == []


def testNodeCenter():
    row = GraphRow(Commit("a"), lane=2, colorId=0, edges=(), hasParents=False, hasChildren=False)
    expanded = VIEW_MODE_CONFIG[ViewMode.EXPANDED]
    assert nodeCenter(row, 3, expanded) == QPointF(60, 154)


def testIsHeadRow():
    head = GraphRow(Commit("a", refs=("HEAD -> main",)), 0, 0, (), False, False)
    branch = GraphRow(Commit("b", refs=("feature",)), 0, 0, (), False, False)
    assert isHeadRow(head)
    assert not isHeadRow(branch)


def testContinuationLines():
    sequence, _ = GraphDiagram.parseDefinition("a-b:zzz c:missing")
    layout = buildGraph(sequence)

    paths = continuationPaths(layout, COMPACT, 640)
    assert [colorId for _, colorId in paths] == [0, 1]
    assert startOf(paths[0][0]) == QPointF(20, 96)
    assert paths[0][0].currentPosition() == QPointF(20, 640)
    assert startOf(paths[1][0]) == QPointF(36, 96)

    # History taller than the viewport: nothing to extend
    assert continuationPaths(layout, COMPACT, 50) == []


def testContinuationAfterRootCommit():
    layout = buildGraph(GraphDiagram.parseDefinition("a-b")[0])
    paths = continuationPaths(layout, COMPACT, 200)
    assert len(paths) == 1
    assert startOf(paths[0][0]) == QPointF(20, 64)


def testPaletteCycles():
    assert colors.getColor(0) == colors.blue
    assert colors.getColor(8) == colors.blue
    assert colors.getColor(9) == colors.green
    assert colors.getBranchColor(3).dim.alphaF() == pytest.approx(colors.DIM_ALPHA, abs=0.01)
    assert colors.tagColor.base == colors.yellow


def paintRow(row, highlightedColorId=-1) -> QImage:
    image = QImage(64, 64, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(Qt.GlobalColor.transparent)
    painter = QPainter(image)
    try:
        paintGraphRow(painter, row, 0, COMPACT, highlightedColorId)
    finally:
        painter.end()
    return image


def testPaintGraphRow(qapp):
    row = GraphRow(Commit("a", ("b",)), lane=0, colorId=1, edges=(), hasParents=True, hasChildren=False)
    image = paintRow(row)

    bullet = image.pixelColor(20, 16)
    assert bullet.name() == colors.green.name()
    assert bullet.alpha() == 255

    # Lower stub drawn, no upper stub
    assert image.pixelColor(20, 28).alpha() > 0
    assert image.pixelColor(20, 4).alpha() == 0

    # Nothing in the other lanes
    assert image.pixelColor(52, 16).alpha() == 0


def testPaintGraphRowDimsOtherLineages(qapp):
    row = GraphRow(Commit("a", ("b",)), lane=0, colorId=1, edges=(), hasParents=True, hasChildren=False)

    assert paintRow(row, highlightedColorId=1).pixelColor(20, 16).alpha() == 255
    assert paintRow(row, highlightedColorId=4).pixelColor(20, 16).alpha() < 200


def testPaintContinuation(qapp):
    """
    Two-row history in a 200px tall container: lane 0 runs on
    from the bottom of the last row (y=64) down to the container's bottom.
    """
    layout = buildGraph(GraphDiagram.parseDefinition("a-b")[0])

    image = QImage(64, 200, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(Qt.GlobalColor.transparent)
    painter = QPainter(image)
    try:
        paintContinuation(painter, layout, COMPACT, 200)
    finally:
        painter.end()

    pixel = image.pixelColor(20, 150)
    assert pixel.name() == colors.blue.name()
    assert pixel.alpha() == 255

    # Nothing above the end of the history, nothing in other lanes
    assert image.pixelColor(20, 30).alpha() == 0
    assert image.pixelColor(52, 150).alpha() == 0
