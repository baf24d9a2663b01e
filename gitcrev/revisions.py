"""
Resolution of revision specifications into concrete commits.

Two forms are understood:

    <rev>           a single commit
    <from>..<to>    every commit reached walking back from <to> until
                    <from> is met; <from> itself is excluded

Results are ordered the way git walks history, most recent first.
"""

import logging
from typing import List, Optional, Tuple

from git import Repo
from git.exc import BadName, BadObject

from .config import DEFAULT_REVISION
from .errors import InvalidRevisionSpec, UnreachableRevision
from .index import CommitRecord

logger = logging.getLogger(__name__)

RANGE_SEPARATOR = ".."
SYMMETRIC_SEPARATOR = "..."


def split_range(spec: str) -> Tuple[str, str]:
    """Split 'from..to' into its endpoints; an empty side means HEAD.

    Raises:
        InvalidRevisionSpec: For symmetric differences or more than one range
    """
    if SYMMETRIC_SEPARATOR in spec:
        raise InvalidRevisionSpec(
            spec, f"Symmetric difference ranges are not supported: {spec}"
        )
    parts = spec.split(RANGE_SEPARATOR)
    if len(parts) != 2:
        raise InvalidRevisionSpec(spec)
    from_rev, to_rev = (part.strip() or DEFAULT_REVISION for part in parts)
    return from_rev, to_rev


class RevisionResolver:
    """Turns revision specifications into ordered lists of commits."""

    def __init__(self, repository: Repo):
        self.repository = repository

    def resolve(self, spec: str, allow_unreachable: bool = False) -> List[CommitRecord]:
        """Resolve a specification into commit records.

        Args:
            spec: Single revision or 'from..to' range
            allow_unreachable: When the start of a range is never met during
                the walk, return everything walked instead of failing

        Returns:
            Commit records, most recent first

        Raises:
            InvalidRevisionSpec: If spec cannot be parsed or resolved
            UnreachableRevision: If the range start is not an ancestor of
                its end and allow_unreachable is False
        """
        spec = (spec or "").strip()
        if not spec:
            raise InvalidRevisionSpec(spec)

        if RANGE_SEPARATOR not in spec:
            commit = self.lookup(spec)
            logger.debug("Resolved %s to %s", spec, commit.hexsha)
            return [CommitRecord.from_commit(commit)]

        from_rev, to_rev = split_range(spec)
        from_commit = self.lookup(from_rev, spec)
        to_commit = self.lookup(to_rev, spec)

        records = []
        found = False
        for commit in self.repository.iter_commits(to_commit.hexsha):
            if commit.hexsha == from_commit.hexsha:
                found = True
                break
            records.append(CommitRecord.from_commit(commit))

        if not found:
            if not allow_unreachable:
                raise UnreachableRevision(spec, from_rev)
            logger.warning(
                "%s is not an ancestor of %s; using all %d walked commits",
                from_rev, to_rev, len(records)
            )

        logger.debug("Resolved %s to %d commits", spec, len(records))
        return records

    def lookup(self, rev: str, spec: Optional[str] = None):
        """Resolve one revision to a commit, peeling tags."""
        try:
            return self.repository.commit(rev)
        except (BadName, BadObject, ValueError, IndexError) as exc:
            logger.debug("Failed to resolve %s: %s", rev, exc)
            raise InvalidRevisionSpec(spec or rev)
