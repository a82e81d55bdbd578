# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Supplies the commit sequence for the graph, straight from a repository on disk.
"""

import datetime
import logging
from collections import defaultdict

import pygit2
from pygit2 import Commit as _GitCommit, GitError, InvalidSpecError, Oid, Repository
from pygit2.enums import ReferenceType, SortMode

from vibograph.graph import Commit
from vibograph.settings import DEFAULT_LOG_LIMIT
from vibograph.toolbox import benchmark

logger = logging.getLogger(__name__)

SHORT_HASH_CHARS = 7


class CommitSourceError(Exception):
    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


def openRepo(path: str) -> Repository:
    try:
        return Repository(path)
    except (GitError, KeyError, OSError) as exc:
        raise CommitSourceError(path, f"not a git repository ({exc})") from exc


def mapRefsToIds(repo: Repository) -> dict[str, Oid]:
    """
    Return commit oids at the tip of all branches and tags in the repository.

    To ensure a consistent outcome across multiple walks of the same commit graph,
    the oids are sorted by ascending commit time.
    """

    tips: list[tuple[str, _GitCommit]] = []

    for ref in repo.references.objects:
        if (ref.type != ReferenceType.DIRECT  # Skip symbolic references
                or ref.name == "refs/stash"):  # Stashes aren't part of the graph
            continue

        try:
            commit: _GitCommit = ref.peel(_GitCommit)
            tips.append((ref.name, commit))
        except (InvalidSpecError, GitError) as e:
            # Some refs might not be committish
            logger.info(f"{e} - Skipping ref '{ref.name}'")

    # Always add 'HEAD' if we have one, just before sorting, so that the
    # checked-out branch wins ties with other tips at the same timestamp.
    if not repo.head_is_unborn:
        tips.append(("HEAD", repo.head.peel(_GitCommit)))

    # Reinsert tips in ascending chronological order (stable sort)
    tips.sort(key=lambda item: item[1].commit_time)
    return {name: commit.id for name, commit in tips}


def decorateRefs(repo: Repository, refs: dict[str, Oid]) -> dict[Oid, list[str]]:
    """
    Build `git log --decorate`-style labels for each commit that has refs,
    e.g. "HEAD -> main", "origin/main", "tag: v1.0".
    """

    refsAt = defaultdict(list)

    headBranch = ""
    if not repo.head_is_unborn and not repo.head_is_detached:
        headBranch = repo.head.name

    for name, oid in refs.items():
        if name == "HEAD":
            continue
        elif name == headBranch:
            refsAt[oid].insert(0, f"HEAD -> {name.removeprefix('refs/heads/')}")
        elif name.startswith("refs/heads/"):
            refsAt[oid].append(name.removeprefix("refs/heads/"))
        elif name.startswith("refs/remotes/"):
            refsAt[oid].append(name.removeprefix("refs/remotes/"))
        elif name.startswith("refs/tags/"):
            refsAt[oid].append(f"tag: {name.removeprefix('refs/tags/')}")
        else:
            refsAt[oid].append(name)

    if "HEAD" in refs and (repo.head_is_detached or not headBranch):
        refsAt[refs["HEAD"]].insert(0, "HEAD")

    return refsAt


def signatureDate(signature: pygit2.Signature) -> str:
    tz = datetime.timezone(datetime.timedelta(minutes=signature.offset))
    return datetime.datetime.fromtimestamp(signature.time, tz).isoformat()


def toCommit(gitCommit: _GitCommit, refs: list[str]) -> Commit:
    hash_ = str(gitCommit.id)
    summary = gitCommit.message.split("\n", 1)[0].strip()
    return Commit(
        hash=hash_,
        parents=tuple(str(p) for p in gitCommit.parent_ids),
        refs=tuple(refs),
        message=summary,
        author=gitCommit.author.name,
        email=gitCommit.author.email,
        date=signatureDate(gitCommit.author),
        hashShort=hash_[:SHORT_HASH_CHARS])


@benchmark
def loadCommits(
        path: str,
        limit: int = DEFAULT_LOG_LIMIT,
        branch: str = "",
        chronological: bool = False
) -> list[Commit]:
    """
    Walk the repository's history in `git log` order (children before parents).

    Walks all branches and tags, or only `branch` (any revision spec) if given.
    Stops after `limit` commits; a limit of 0 means the entire history.
    Parents beyond the limit are left dangling in the returned commits.
    """

    repo = openRepo(path)

    try:
        refs = mapRefsToIds(repo)
        refsAt = decorateRefs(repo, refs)

        sorting = SortMode.TOPOLOGICAL
        if chronological:
            # Keep TOPOLOGICAL in addition to TIME so that a commit never
            # appears before its children.
            sorting |= SortMode.TIME

        if branch:
            try:
                tipIds = [repo.revparse_single(branch).peel(_GitCommit).id]
            except (KeyError, InvalidSpecError) as exc:
                raise CommitSourceError(path, f"unknown revision '{branch}'") from exc
        else:
            tipIds = list(refs.values())

        if not tipIds:
            logger.info(f"{path}: no commits yet")
            return []

        walker = repo.walk(None, sorting)

        # In topological mode, the order in which the tips are pushed is
        # significant (last in, first out). The tips are pre-sorted in
        # ascending chronological order so that the latest modified branches
        # come out at the top of the graph.
        for tip in tipIds:
            walker.push(tip)

        if limit <= 0:
            limit = 2**63

        commits = []
        for gitCommit in walker:
            commits.append(toCommit(gitCommit, refsAt.get(gitCommit.id, [])))
            if len(commits) >= limit:
                logger.info(f"{path}: truncated log at {limit} commits")
                break

    except GitError as exc:
        raise CommitSourceError(path, str(exc)) from exc

    finally:
        repo.free()

    logger.debug(f"{path}: loaded {len(commits)} commits")
    return commits
