# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import tempfile

import pytest

from vibograph.qt import QGuiApplication


@pytest.fixture(scope="session")
def qapp_cls():
    yield QGuiApplication


@pytest.fixture
def tempDir() -> tempfile.TemporaryDirectory:
    td = tempfile.TemporaryDirectory(prefix="vibographtest-")
    yield td
    td.cleanup()


@pytest.fixture(autouse=True)
def isolatedPrefs(tmp_path, monkeypatch):
    """ Keep prefs out of the shared test-mode folder and restore defaults after each test. """
    from vibograph import settings
    from vibograph.prefsfile import PrefsFile

    configDir = str(tmp_path / "config")
    monkeypatch.setattr(PrefsFile, "getParentDir", lambda self: configDir)
    settings.prefs.reset()
    yield configDir
    settings.prefs.reset()
