# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

APP_SYSTEM_NAME = "vibograph"
APP_DISPLAY_NAME = "VibOGraph"
APP_VERSION = "0.1"

APP_FREEZE_QT = ""
"""
Force a Qt binding in frozen builds (e.g. "pyqt6").
Leave blank to pick a binding at runtime.
"""
