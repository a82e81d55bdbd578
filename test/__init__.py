# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os

logging.basicConfig(level=logging.DEBUG)
logging.captureWarnings(True)

# Painting tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# pytest-qt and vibograph.qt must load the same binding.
# PYTEST_QT_API wins if both variables are set.
_binding = os.environ.get("PYTEST_QT_API") or os.environ.get("QT_API") or "pyqt6"
os.environ["PYTEST_QT_API"] = os.environ["QT_API"] = _binding.lower()

from vibograph.qt import *  # noqa: E402 - Qt must be imported after QT_API is set
