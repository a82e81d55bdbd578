# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import json
import logging
import os

from vibograph import settings
from vibograph.settings import LoggingLevel, Prefs, ViewMode


def testDefaultPrefsAreNotWritten(isolatedPrefs):
    prefs = Prefs()
    assert prefs.write(force=True) == ""
    assert not os.path.exists(os.path.join(isolatedPrefs, "prefs.json"))


def testWriteOnlyWhenDirty(isolatedPrefs):
    prefs = Prefs()
    prefs.viewMode = ViewMode.COMPACT
    assert prefs.write() == ""

    prefs.setDirty()
    path = prefs.write()
    assert path == os.path.join(isolatedPrefs, "prefs.json")
    assert not prefs.isDirty()


def testPrefsRoundTrip(isolatedPrefs):
    prefs = Prefs()
    prefs.viewMode = ViewMode.COMPACT
    prefs.maxCommits = 1000
    prefs.verbosity = LoggingLevel.DEBUG
    prefs.setDirty()
    path = prefs.write()

    with open(path, encoding="utf-8") as f:
        blob = json.load(f)
    # Only non-default values are written out, enums by value
    assert blob == {"viewMode": "compact", "maxCommits": 1000, "verbosity": logging.DEBUG}

    reloaded = Prefs()
    assert reloaded.load()
    assert reloaded.viewMode is ViewMode.COMPACT
    assert reloaded.maxCommits == 1000
    assert reloaded.verbosity is LoggingLevel.DEBUG
    assert reloaded.scrollBuffer == settings.SCROLL_BUFFER
    assert reloaded.viewConfig.rowHeight == 32


def testResetToDefaultsDeletesFile(isolatedPrefs):
    prefs = Prefs()
    prefs.chronologicalOrder = True
    path = prefs.write(force=True)
    assert os.path.isfile(path)

    prefs.reset()
    assert not prefs.chronologicalOrder
    prefs.write(force=True)
    assert not os.path.exists(path)


def writeRawPrefs(configDir, text):
    os.makedirs(configDir, exist_ok=True)
    with open(os.path.join(configDir, "prefs.json"), "wt", encoding="utf-8") as f:
        f.write(text)


def testLoadMissingFile():
    assert not Prefs().load()


def testLoadCorruptJson(isolatedPrefs, caplog):
    writeRawPrefs(isolatedPrefs, "{not json")
    prefs = Prefs()
    assert not prefs.load()
    assert prefs == Prefs()
    assert "prefs.json" in caplog.text


def testLoadNonObjectJson(isolatedPrefs, caplog):
    writeRawPrefs(isolatedPrefs, "[1, 2, 3]")
    assert not Prefs().load()
    assert "expecting a JSON object" in caplog.text


def testLoadDropsBadFields(isolatedPrefs, caplog):
    writeRawPrefs(isolatedPrefs, json.dumps({
        "viewMode": "gigantic",
        "maxCommits": "lots",
        "scrollBuffer": True,
        "chronologicalOrder": True,
        "someOldSetting": 42,
        "_category_graph": 1,
    }))

    prefs = Prefs()
    assert prefs.load()

    assert prefs.chronologicalOrder is True
    assert prefs.viewMode is ViewMode.EXPANDED
    assert prefs.maxCommits == settings.DEFAULT_LOG_LIMIT
    assert prefs.scrollBuffer == settings.SCROLL_BUFFER
    assert "dropping key: someOldSetting" in caplog.text
    assert "dropping key: _category_graph" in caplog.text
    assert "maxCommits" in caplog.text


def testApplyLoggingLevel():
    root = logging.getLogger()
    oldLevel = root.level
    try:
        settings.prefs.verbosity = LoggingLevel.INFO
        settings.applyLoggingLevel()
        assert root.level == logging.INFO
    finally:
        root.setLevel(oldLevel)
