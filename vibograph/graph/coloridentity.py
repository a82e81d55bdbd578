# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from vibograph.graph.graph import Hash


class ColorIdentityTracker:
    """
    Assigns a color identity to each branch lineage.

    Color identities are decoupled from lane numbers: a commit's colorId
    is handed down to its first parent, so a branch keeps its color even
    if another branch takes over the lane it used to occupy higher up.

    ColorIds are dealt out from a monotonic counter and never revised.
    """

    hashToColor: dict[Hash, int]
    colorCounter: int

    def __init__(self):
        self.hashToColor = {}
        self.colorCounter = 0

    def newColor(self) -> int:
        colorId = self.colorCounter
        self.colorCounter += 1
        return colorId

    def colorOf(self, hash_: Hash, fallback: int = -1) -> int:
        return self.hashToColor.get(hash_, fallback)

    def hasColor(self, hash_: Hash) -> bool:
        return hash_ in self.hashToColor

    def claim(self, hash_: Hash) -> int:
        """ Return the commit's colorId, dealing out a fresh one if it has none yet. """
        try:
            return self.hashToColor[hash_]
        except KeyError:
            colorId = self.newColor()
            self.hashToColor[hash_] = colorId
            return colorId

    def assign(self, hash_: Hash, colorId: int):
        self.hashToColor[hash_] = colorId
