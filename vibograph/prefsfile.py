# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
JSON persistence for dataclass-based preferences.

Only the fields that differ from their defaults go to disk. Fields whose
names start with an underscore are never persisted.
"""

import dataclasses
import enum
import json
import logging
import os
import tempfile
from typing import Any

from vibograph.appconsts import APP_SYSTEM_NAME
from vibograph.qt import QStandardPaths

logger = logging.getLogger(__name__)


def fieldDefault(field: dataclasses.Field) -> Any:
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return field.default


def encodeValue(value: Any) -> Any:
    """ Make a pref value JSON-friendly. """
    if isinstance(value, enum.Enum):
        return value.value
    return value


def decodeValue(value: Any, fieldType: type) -> Any:
    """
    Convert a value read from JSON to the type declared by the pref field.
    Raises ValueError if the JSON value doesn't fit.
    """
    if issubclass(fieldType, enum.Enum):
        jsonType = str if issubclass(fieldType, str) else int
        if type(value) is not jsonType:
            raise ValueError(f"expecting {jsonType.__name__}, got {type(value).__name__}")
        return fieldType(value)  # ValueError if not a member

    # Compare exact types: bool is an int subclass and must not pass for one
    if type(value) is not fieldType:
        raise ValueError(f"expecting {fieldType.__name__}, got {type(value).__name__}")
    return value


class PrefsFile:
    _filename = ""

    def getParentDir(self) -> str:
        from vibograph.settings import TEST_MODE
        if TEST_MODE:
            return os.path.join(tempfile.gettempdir(), f"{APP_SYSTEM_NAME}-testmode-config")
        configRoot = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericConfigLocation)
        return os.path.join(configRoot, APP_SYSTEM_NAME) if configRoot else ""

    def fullPath(self) -> str:
        assert self._filename, "subclass must set _filename"
        parentDir = self.getParentDir()
        return os.path.join(parentDir, self._filename) if parentDir else ""

    def setDirty(self):
        self._dirty = True

    def isDirty(self) -> bool:
        return getattr(self, "_dirty", False)

    def persistentFields(self) -> list[dataclasses.Field]:
        assert dataclasses.is_dataclass(self)
        return [f for f in dataclasses.fields(self) if not f.name.startswith("_")]

    def reset(self):
        for f in dataclasses.fields(self):
            setattr(self, f.name, fieldDefault(f))

    def toJson(self) -> dict[str, Any]:
        """ Non-default values, ready for json.dump. """
        return {f.name: encodeValue(getattr(self, f.name))
                for f in self.persistentFields()
                if getattr(self, f.name) != fieldDefault(f)}

    def write(self, force=False) -> str:
        """
        Save non-default values to disk, if there are any unsaved changes
        (or if `force` is set). Return the path that was written, or an empty
        string if nothing was written.
        """
        if not (force or self.isDirty()):
            return ""

        path = self.fullPath()
        if not path:
            logger.warning("No config location to write prefs to")
            return ""

        blob = self.toJson()
        self._dirty = False

        if not blob:
            # All defaults: no need for a file at all
            if os.path.isfile(path):
                logger.debug(f"Deleting {path} since all prefs are back to defaults")
                os.unlink(path)
            return ""

        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wt", encoding="utf-8") as f:
            json.dump(blob, f, indent="\t")

        logger.info(f"Wrote {path}")
        return path

    def load(self) -> bool:
        """
        Read prefs from disk. Keys that are unknown or that can't be decoded
        are dropped with a warning; the corresponding fields keep their values.
        """
        path = self.fullPath()
        if not path or not os.path.isfile(path):
            return False

        try:
            with open(path, "rt", encoding="utf-8") as f:
                blob = json.load(f)
        except ValueError as exc:
            logger.warning(f"{path}: {exc}", exc_info=True)
            return False

        if not isinstance(blob, dict):
            logger.warning(f"{path}: expecting a JSON object")
            return False

        fieldTypes = {f.name: f.type for f in self.persistentFields()}

        for key, value in blob.items():
            if key not in fieldTypes:
                logger.warning(f"{path}: dropping key: {key}")
                continue
            if value is None:
                continue
            try:
                setattr(self, key, decodeValue(value, fieldTypes[key]))
            except ValueError as exc:
                logger.warning(f"{path}: {key}: {exc}")

        self._dirty = False
        return True
