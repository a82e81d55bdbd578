# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
import enum
import logging
from dataclasses import dataclass
from typing import Any, Sequence

logger = logging.getLogger(__name__)

Hash = str


@dataclass(frozen=True)
class Commit:
    """
    A commit as supplied by a CommitSource.

    Only `hash` and `parents` matter to the layout. The other fields are
    display metadata carried through to the renderer.
    """

    hash: Hash
    parents: tuple[Hash, ...] = ()
    "Ordered parent hashes. Parent #0 is the mainline (first parent)."

    refs: tuple[str, ...] = ()
    message: str = ""
    author: str = ""
    email: str = ""
    date: str = ""
    hashShort: str = ""

    @staticmethod
    def fromJson(blob: dict[str, Any]) -> Commit:
        """
        Build a Commit from a `log`-style payload, e.g.
        {"hash": ..., "parents": [...], "refs": [...], ...}.
        Missing or null `parents`/`refs` are treated as empty.
        """
        hash_ = str(blob["hash"])
        return Commit(
            hash=hash_,
            parents=tuple(str(p) for p in blob.get("parents") or ()),
            refs=tuple(str(r) for r in blob.get("refs") or ()),
            message=str(blob.get("message") or ""),
            author=str(blob.get("author") or ""),
            email=str(blob.get("email") or ""),
            date=str(blob.get("date") or ""),
            hashShort=str(blob.get("hashShort") or hash_[:7]),
        )

    def toJson(self) -> dict[str, Any]:
        blob = dataclasses.asdict(self)
        blob["parents"] = list(self.parents)
        blob["refs"] = list(self.refs)
        return blob


def parentsOf(commit) -> Sequence[Hash]:
    """
    Parent hashes of any commit-like object.
    A missing or null `parents` attribute means a root commit.
    """
    return getattr(commit, "parents", None) or ()


class EdgeType(enum.StrEnum):
    VERTICAL = "vertical"
    "Straight continuation of a lane that passes by the row's commit."

    MERGE_IN = "merge-in"
    "The row's lane joins a lane that one of its parents already occupies."

    BRANCH_OUT = "branch-out"
    "A new lane is spawned below the row for a parent that isn't placed yet."


@dataclass(frozen=True)
class Edge:
    type: EdgeType
    fromLane: int
    toLane: int
    colorId: int


@dataclass(frozen=True)
class GraphRow:
    commit: Any
    "The Commit (or commit-like object) drawn on this row."

    lane: int
    colorId: int
    edges: tuple[Edge, ...]
    hasParents: bool
    hasChildren: bool

    @property
    def hash(self) -> Hash:
        return self.commit.hash


@dataclass(frozen=True)
class ActiveLane:
    """ A lane that is still open after the last row. """
    lane: int
    colorId: int


@dataclass(frozen=True)
class GraphLayout:
    rows: tuple[GraphRow, ...] = ()
    maxLane: int = 0
    activeLanes: tuple[ActiveLane, ...] = ()

    def isEmpty(self):
        return len(self.rows) == 0

    def __len__(self):
        return len(self.rows)

    def rowOf(self, hash_: Hash) -> int:
        """
        Return the index of the row that holds the given commit.
        Raises LookupError if the commit isn't part of the layout.
        """
        for i, row in enumerate(self.rows):
            if row.commit.hash == hash_:
                return i
        raise LookupError(f"commit {hash_} isn't in the graph")

    def toJson(self) -> dict[str, Any]:
        """ Renderer-facing form of the layout (plain dicts and lists). """
        return {
            "rows": [
                {
                    "commit": row.commit.toJson() if hasattr(row.commit, "toJson") else {"hash": row.commit.hash},
                    "lane": row.lane,
                    "colorId": row.colorId,
                    "edges": [dataclasses.asdict(edge) for edge in row.edges],
                    "hasParents": row.hasParents,
                    "hasChildren": row.hasChildren,
                }
                for row in self.rows
            ],
            "maxLane": self.maxLane,
            "activeLanes": [dataclasses.asdict(al) for al in self.activeLanes],
        }


EMPTY_LAYOUT = GraphLayout()
