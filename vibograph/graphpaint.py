# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

from vibograph import colors
from vibograph.graph import Edge, EdgeType, GraphLayout, GraphRow
from vibograph.qt import *
from vibograph.settings import ViewModeConfig

logger = logging.getLogger(__name__)

CORNER_RADIUS = 5
LANE_THICKNESS = 2


def verticalPath(x: float, y1: float, y2: float) -> QPainterPath:
    path = QPainterPath()
    path.moveTo(x, y1)
    path.lineTo(x, y2)
    return path


def _cornerRadius(sourceX, sourceY, targetX, targetY) -> float:
    return min(CORNER_RADIUS, abs(targetX - sourceX) / 2, abs(targetY - sourceY) / 2)


def mergeInPath(sourceX: float, sourceY: float, targetX: float, targetY: float) -> QPainterPath:
    """
    Right-angle connector that goes down from the source column,
    turns a rounded corner, then runs horizontally to the target.
    """
    if sourceX == targetX:
        return verticalPath(sourceX, sourceY, targetY)

    r = _cornerRadius(sourceX, sourceY, targetX, targetY)
    direction = 1 if targetX > sourceX else -1

    path = QPainterPath()
    path.moveTo(sourceX, sourceY)
    path.lineTo(sourceX, targetY - r)
    path.quadTo(sourceX, targetY, sourceX + direction * r, targetY)
    path.lineTo(targetX, targetY)
    return path


def branchOutPath(sourceX: float, sourceY: float, targetX: float, targetY: float) -> QPainterPath:
    """
    Right-angle connector that leaves the source horizontally,
    turns a rounded corner, then goes down the target column.
    """
    if sourceX == targetX:
        return verticalPath(sourceX, sourceY, targetY)

    r = _cornerRadius(sourceX, sourceY, targetX, targetY)
    direction = 1 if targetX > sourceX else -1

    path = QPainterPath()
    path.moveTo(sourceX, sourceY)
    path.lineTo(targetX - direction * r, sourceY)
    path.quadTo(targetX, sourceY, targetX, sourceY + r)
    path.lineTo(targetX, targetY)
    return path


def edgePath(edge: Edge, config: ViewModeConfig, top: float = 0) -> QPainterPath:
    """
    Geometry of an edge within a row whose top is at `top`.
    Vertical edges span the full row; connectors start at the commit's bullet point.
    """
    bottom = top + config.rowHeight
    middle = top + config.rowHeight / 2
    fromX = config.laneX(edge.fromLane)
    toX = config.laneX(edge.toLane)

    if edge.type == EdgeType.VERTICAL:
        return verticalPath(fromX, top, bottom)
    elif edge.type == EdgeType.MERGE_IN:
        return mergeInPath(fromX, middle, toX, bottom)
    elif edge.type == EdgeType.BRANCH_OUT:
        return branchOutPath(fromX, middle, toX, bottom)
    else:  # pragma: no cover
        raise NotImplementedError(f"unsupported edge type {edge.type}")


def rowPaths(row: GraphRow, rowIndex: int, config: ViewModeConfig) -> list[tuple[QPainterPath, int]]:
    """
    All the lines to draw for a row, each with its colorId, in painting order:
    edges first, then the stubs that connect the commit's bullet point
    to its children above and to its parents below.
    """
    top = rowIndex * config.rowHeight
    middle = top + config.rowHeight / 2
    bottom = top + config.rowHeight
    nodeX = config.laneX(row.lane)

    paths = [(edgePath(edge, config, top), edge.colorId) for edge in row.edges]

    if row.hasChildren:
        paths.append((verticalPath(nodeX, top, middle), row.colorId))

    if row.hasParents:
        paths.append((verticalPath(nodeX, middle, bottom), row.colorId))

    return paths


def nodeCenter(row: GraphRow, rowIndex: int, config: ViewModeConfig) -> QPointF:
    return QPointF(config.laneX(row.lane), rowIndex * config.rowHeight + config.rowHeight / 2)


def isHeadRow(row: GraphRow) -> bool:
    return any("HEAD" in ref for ref in getattr(row.commit, "refs", ()))


def continuationPaths(
        layout: GraphLayout,
        config: ViewModeConfig,
        containerHeight: float
) -> list[tuple[QPainterPath, int]]:
    """
    Lines for the lanes that are still open after the last row, extended
    down to the bottom of the container when the history is shorter than
    the viewport.
    """
    historyBottom = len(layout.rows) * config.rowHeight
    if containerHeight <= historyBottom:
        return []

    paths = []
    for activeLane in layout.activeLanes:
        x = config.laneX(activeLane.lane)
        paths.append((verticalPath(x, historyBottom, containerHeight), activeLane.colorId))
    return paths


def _lanePen(colorId: int, dimmed: bool = False) -> QPen:
    branchColor = colors.getBranchColor(colorId)
    color = branchColor.dim if dimmed else branchColor.base
    return QPen(color, LANE_THICKNESS, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap, Qt.PenJoinStyle.RoundJoin)


def paintGraphRow(
        painter: QPainter,
        row: GraphRow,
        rowIndex: int,
        config: ViewModeConfig,
        highlightedColorId: int = -1
):
    """
    Paint a row's lines and bullet point.
    If highlightedColorId is given, lines of any other color are dimmed.
    """
    painter.save()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)

    def isDimmed(colorId):
        return highlightedColorId >= 0 and colorId != highlightedColorId

    painter.setBrush(Qt.BrushStyle.NoBrush)
    for path, colorId in rowPaths(row, rowIndex, config):
        painter.setPen(_lanePen(colorId, isDimmed(colorId)))
        painter.drawPath(path)

    # Bullet point
    center = nodeCenter(row, rowIndex, config)
    isHead = isHeadRow(row)
    radius = config.headNodeRadius if isHead else config.nodeRadius
    nodeColor = colors.getBranchColor(row.colorId)
    painter.setPen(QPen(colors.headRing, LANE_THICKNESS) if isHead else Qt.PenStyle.NoPen)
    painter.setBrush(nodeColor.dim if isDimmed(row.colorId) else nodeColor.base)
    painter.drawEllipse(center, radius, radius)

    painter.restore()


def paintContinuation(painter: QPainter, layout: GraphLayout, config: ViewModeConfig, containerHeight: float):
    painter.save()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
    painter.setBrush(Qt.BrushStyle.NoBrush)
    for path, colorId in continuationPaths(layout, config, containerHeight):
        painter.setPen(_lanePen(colorId))
        painter.drawPath(path)
    painter.restore()
