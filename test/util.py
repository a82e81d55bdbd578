# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import os

import pygit2
from pygit2 import Oid, Repository, Signature

from vibograph.graph import *

TEST_SIGNATURE = Signature("Test Person", "toto@example.com", 1672600000, 0)


def layoutOf(definition: str) -> GraphLayout:
    sequence, _heads = GraphDiagram.parseDefinition(definition)
    layout = buildGraph(sequence)
    print("\n" + GraphDiagram.diagram(layout, verbose=True))
    return layout


def rowsByHash(layout: GraphLayout) -> dict[str, GraphRow]:
    return {row.commit.hash: row for row in layout.rows}


def connectors(row: GraphRow) -> list[Edge]:
    return [e for e in row.edges if e.type != EdgeType.VERTICAL]


def verticals(row: GraphRow) -> list[Edge]:
    return [e for e in row.edges if e.type == EdgeType.VERTICAL]


def initRepo(path: str) -> Repository:
    os.makedirs(path, exist_ok=True)
    return pygit2.init_repository(path, initial_head="main")


def makeCommit(repo: Repository, refName: str | None, message: str, parents: list[Oid], time: int) -> Oid:
    signature = Signature(TEST_SIGNATURE.name, TEST_SIGNATURE.email, time, 0)
    tree = repo.TreeBuilder().write()
    return repo.create_commit(refName, signature, signature, message, tree, parents)


def makeMergeRepo(path: str) -> dict[str, Oid]:
    """
    Repo with a feature branch merged into main, and a tag on the root commit:

        m     (HEAD -> main)
        |\\
        | f1  (feature)
        c2 |
        |/
        c1    (tag: v1)
    """
    repo = initRepo(path)
    c1 = makeCommit(repo, "refs/heads/main", "c1\n\nroot commit", [], 1000)
    c2 = makeCommit(repo, "refs/heads/main", "c2", [c1], 2000)
    f1 = makeCommit(repo, None, "f1", [c1], 3000)
    repo.create_reference("refs/heads/feature", f1)
    m = makeCommit(repo, "refs/heads/main", "Merge feature", [c2, f1], 4000)
    repo.create_reference("refs/tags/v1", c1)
    repo.free()
    return {"c1": c1, "c2": c2, "f1": f1, "m": m}
