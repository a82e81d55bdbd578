# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
from collections.abc import Sequence

from vibograph import settings
from vibograph.graph import EMPTY_LAYOUT, GraphLayout, GraphRow, buildGraph
from vibograph.qt import *
from vibograph.settings import ViewModeConfig
from vibograph.viewport import ViewportWindow

logger = logging.getLogger(__name__)


class LayoutSession(QObject):
    """
    Holds the graph layout for one repository tab.

    Commit lists are fetched asynchronously. Each fetch must first obtain a
    token from beginRequest(). When a fetch completes, its commits are only
    accepted if no newer request has been made in the meantime
    (last request wins).

    The layout is only recomputed if the delivered commits actually differ
    from the ones that are already laid out.
    """

    layoutChanged = Signal(object)
    "Emitted with the new GraphLayout whenever the layout is recomputed."

    generation: int
    commits: tuple
    layout: GraphLayout

    def __init__(self, parent: QObject | None = None, viewConfig: ViewModeConfig | None = None):
        super().__init__(parent)
        self.generation = 0
        self.commits = ()
        self.layout = EMPTY_LAYOUT
        self._viewConfig = viewConfig
        self.numLayoutPasses = 0

    @property
    def viewConfig(self) -> ViewModeConfig:
        return self._viewConfig or settings.prefs.viewConfig

    def setViewConfig(self, viewConfig: ViewModeConfig | None):
        self._viewConfig = viewConfig

    def beginRequest(self) -> int:
        """ Call this before fetching a new commit list. """
        self.generation += 1
        return self.generation

    def isStale(self, token: int) -> bool:
        return token != self.generation

    def deliver(self, token: int, commits: Sequence) -> bool:
        """
        Commit the result of a fetch to the session.

        Return False if the result was discarded because a newer request
        was made after this one.
        """
        if self.isStale(token):
            logger.info(f"Discarding stale commit list (request #{token}, latest is #{self.generation})")
            return False

        self.setCommits(commits)
        return True

    def setCommits(self, commits: Sequence):
        commits = tuple(commits)

        if commits == self.commits:
            logger.debug("Commit list unchanged; keeping current layout")
            return

        self.commits = commits
        self.layout = buildGraph(commits)
        self.numLayoutPasses += 1
        self.layoutChanged.emit(self.layout)

    def clear(self):
        self.beginRequest()  # invalidate any pending fetch
        self.setCommits(())

    def viewport(self) -> ViewportWindow:
        return ViewportWindow(
            rowHeight=self.viewConfig.rowHeight,
            rowCount=len(self.layout.rows),
            buffer=settings.prefs.scrollBuffer)

    def visibleRange(self, scrollTop: float, containerHeight: float) -> tuple[int, int]:
        return self.viewport().visibleRange(scrollTop, containerHeight)

    def visibleRows(self, scrollTop: float, containerHeight: float) -> list[tuple[int, GraphRow]]:
        """ (row index, row) pairs to render for the given scroll position. """
        rows = self.layout.rows
        return [(i, rows[i]) for i in self.viewport().visibleRows(scrollTop, containerHeight)]

    def graphWidth(self) -> int:
        return self.viewConfig.graphWidth(self.layout.maxLane)
