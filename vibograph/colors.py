# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

# Branch palette: 8 distinct colors that read well on dark and light backgrounds.

import dataclasses

from vibograph.qt import QColor

blue    = QColor(0x3B82F6)
green   = QColor(0x22C55E)
amber   = QColor(0xF59E0B)
red     = QColor(0xEF4444)
purple  = QColor(0x8B5CF6)
pink    = QColor(0xEC4899)
cyan    = QColor(0x06B6D4)
teal    = QColor(0x14B8A6)
yellow  = QColor(0xEAB308)
white   = QColor(0xFFFFFF)

GLOW_ALPHA = 0.5
DIM_ALPHA = 0.3


def withAlpha(color: QColor, alpha: float) -> QColor:
    c = QColor(color)
    c.setAlphaF(alpha)
    return c


@dataclasses.dataclass(frozen=True)
class BranchColor:
    base: QColor
    glow: QColor
    dim: QColor

    @staticmethod
    def fromBase(base: QColor):
        return BranchColor(base, withAlpha(base, GLOW_ALPHA), withAlpha(base, DIM_ALPHA))


branchPalette = [BranchColor.fromBase(c) for c in (blue, green, amber, red, purple, pink, cyan, teal)]

tagColor = BranchColor.fromBase(yellow)

headRing = white


def getBranchColor(colorId: int) -> BranchColor:
    """ Color of a branch lineage. Cycles through the palette. """
    return branchPalette[colorId % len(branchPalette)]


def getColor(colorId: int) -> QColor:
    return getBranchColor(colorId).base
