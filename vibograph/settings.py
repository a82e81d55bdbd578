# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import logging
import sys

from vibograph.prefsfile import PrefsFile
from vibograph.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL

logger = logging.getLogger(__name__)

TEST_MODE = "pytest" in sys.modules
"""
Unit testing mode (don't touch real user prefs, etc.).
Can be forced with command-line switch "--test-mode".
"""

DEVDEBUG = TEST_MODE
"""
Enable expensive assertions and debugging features.
Can be forced with command-line switch "--debug".
"""

GRAPH_OFFSET = 20
"Horizontal position of lane 0's center, in pixels."

GRAPH_MARGIN = 32
"Extra room to the right of the rightmost lane, in pixels."

SCROLL_BUFFER = 50
"Rows to keep around the visible range when virtualizing the graph."

DEFAULT_LOG_LIMIT = 200


class ViewMode(enum.StrEnum):
    COMPACT = "compact"
    EXPANDED = "expanded"


@dataclasses.dataclass(frozen=True)
class ViewModeConfig:
    rowHeight: int
    colWidth: int
    nodeRadius: int
    headNodeRadius: int
    fontSize: int
    showAuthor: bool

    def laneX(self, lane: int) -> int:
        """ Horizontal position of a lane's center. """
        return GRAPH_OFFSET + lane * self.colWidth

    def graphWidth(self, maxLane: int) -> int:
        return (maxLane + 1) * self.colWidth + GRAPH_MARGIN


VIEW_MODE_CONFIG = {
    ViewMode.COMPACT: ViewModeConfig(
        rowHeight=32,
        colWidth=16,
        nodeRadius=3,
        headNodeRadius=4,
        fontSize=11,
        showAuthor=False,
    ),
    ViewMode.EXPANDED: ViewModeConfig(
        rowHeight=44,
        colWidth=20,
        nodeRadius=5,
        headNodeRadius=6,
        fontSize=14,
        showAuthor=True,
    ),
}


class LoggingLevel(enum.IntEnum):
    BENCHMARK = BENCHMARK_LOGGING_LEVEL
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING


class QtApiNames(enum.StrEnum):
    QTAPI_AUTOMATIC = ""
    QTAPI_PYQT6 = "pyqt6"
    QTAPI_PYSIDE6 = "pyside6"
    QTAPI_PYQT5 = "pyqt5"


@dataclasses.dataclass
class Prefs(PrefsFile):
    _filename = "prefs.json"

    _category_graph             : int                   = 0
    viewMode                    : ViewMode              = ViewMode.EXPANDED
    scrollBuffer                : int                   = SCROLL_BUFFER
    maxCommits                  : int                   = DEFAULT_LOG_LIMIT
    chronologicalOrder          : bool                  = False

    _category_advanced          : int                   = 0
    verbosity                   : LoggingLevel          = LoggingLevel.WARNING
    forceQtApi                  : QtApiNames            = QtApiNames.QTAPI_AUTOMATIC

    @property
    def viewConfig(self) -> ViewModeConfig:
        return VIEW_MODE_CONFIG[self.viewMode]


# The app should load the user's prefs with prefs.load().
prefs = Prefs()


def applyLoggingLevel():
    logging.getLogger().setLevel(prefs.verbosity)
