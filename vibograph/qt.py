# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

# Single entry point for Qt. Import Qt names from here, never from a binding.
#
# PyQt6 is preferred. QT_API (pyqt6, pyside6, pyqt5) or the "forceQtApi"
# pref can push another binding to the front of the queue. The layout engine
# only needs QtCore and QtGui; nothing here pulls in widgets.

import json as _json
import logging as _logging
import os as _os
import sys as _sys

from vibograph.appconsts import *

_logger = _logging.getLogger(__name__)

SUPPORTED_BINDINGS = ("pyqt6", "pyside6", "pyqt5")


def _readBootPref() -> str:
    if APP_FREEZE_QT:
        return APP_FREEZE_QT

    name = _os.environ.get("QT_API", "")
    if name:
        return name.lower()

    # Peek at the prefs file without going through settings (which needs Qt)
    configHome = _os.environ.get("XDG_CONFIG_HOME") or _os.path.expanduser("~/.config")
    prefsPath = _os.path.join(configHome, APP_SYSTEM_NAME, "prefs.json")
    try:
        with open(prefsPath, "rt", encoding="utf-8") as f:
            return str(_json.load(f).get("forceQtApi", "")).lower()
    except (OSError, ValueError, AttributeError):
        return ""


def _bindingQueue(bootPref: str) -> list[str]:
    if APP_FREEZE_QT:
        return [APP_FREEZE_QT]
    queue = list(SUPPORTED_BINDINGS)
    if bootPref in queue:
        queue.remove(bootPref)
        queue.insert(0, bootPref)
    elif bootPref:
        _logger.warning(f"Unrecognized Qt binding name: '{bootPref}'")
    return queue


QT_BINDING_BOOTPREF = _readBootPref()
QT_BINDING = ""
QT_BINDING_VERSION = ""
PYQT5 = PYQT6 = PYSIDE6 = False

for _candidate in _bindingQueue(QT_BINDING_BOOTPREF):
    try:
        if _candidate == "pyqt6":
            from PyQt6.QtCore import *
            from PyQt6.QtGui import *
            PYQT6 = True
        elif _candidate == "pyside6":
            from PySide6.QtCore import *
            from PySide6.QtGui import *
            from PySide6 import __version__ as QT_BINDING_VERSION
            PYSIDE6 = True
        elif _candidate == "pyqt5":
            from PyQt5.QtCore import *
            from PyQt5.QtGui import *
            PYQT5 = True
        else:
            continue
    except ImportError:
        _logger.debug(f"Qt binding {_candidate} isn't available")
        continue

    QT_BINDING = {"pyqt6": "PyQt6", "pyside6": "PySide6", "pyqt5": "PyQt5"}[_candidate]
    break

if not QT_BINDING:
    _sys.stderr.write("No Qt binding found. Please install either PyQt6, PySide6, or PyQt5.\n")
    _sys.exit(1)

QT5 = PYQT5
QT6 = PYQT6 or PYSIDE6

# PyQt spells its signal/slot API differently than PySide
if PYQT5 or PYQT6:
    QT_BINDING_VERSION = PYQT_VERSION_STR
    Signal = pyqtSignal
    SignalInstance = pyqtBoundSignal
    Slot = pyqtSlot

_logger.debug(f"Using {QT_BINDING} {QT_BINDING_VERSION}")
