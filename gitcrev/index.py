"""
Staging index for commits under review.

The index records which commits are staged as trusted and which as
distrusted. It is persisted as a JSON document inside the repository's
state directory and is always read fully, mutated in memory and written
back fully.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Set, Union

from .config import INDEX_FORMAT_VERSION

logger = logging.getLogger(__name__)


class Classification(Enum):
    """Outcome a reviewer assigns to a commit."""
    TRUST = "trust"
    DISTRUST = "distrust"

    @property
    def opposite(self) -> 'Classification':
        if self is Classification.TRUST:
            return Classification.DISTRUST
        return Classification.TRUST


@dataclass(frozen=True)
class CommitRecord:
    """A commit as stored in the index.

    Identity is the commit id alone; two records for the same commit with
    different summaries compare equal and hash alike.
    """
    commit_id: str
    summary: str = field(default="", compare=False)

    def to_dict(self) -> Dict[str, str]:
        return {'commit_id': self.commit_id, 'summary': self.summary}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CommitRecord':
        """Deserialize from dictionary"""
        commit_id = data['commit_id']
        summary = data.get('summary', '')
        if not isinstance(commit_id, str) or not isinstance(summary, str):
            raise ValueError(f"Malformed index entry: {data!r}")
        return cls(commit_id=commit_id, summary=summary)

    @classmethod
    def from_commit(cls, commit) -> 'CommitRecord':
        """Build a record from a GitPython commit object."""
        message = commit.message
        if isinstance(message, bytes):
            message = message.decode('utf-8', errors='replace')
        lines = message.strip().splitlines()
        return cls(commit_id=commit.hexsha, summary=lines[0].strip() if lines else "")


class StagingIndex:
    """Trusted and distrusted commits staged for an ongoing review.

    Both classifications are kept as mappings from commit id to summary so
    uniqueness is driven by the id. The two mappings never share an id.
    """

    def __init__(self):
        self._entries: Dict[Classification, Dict[str, str]] = {
            Classification.TRUST: {},
            Classification.DISTRUST: {},
        }
        self._known_ids: Set[str] = set()

    def insert(self, new_records: Iterable[CommitRecord], classification: Classification) -> None:
        """Stage records under a classification.

        A record classified here is removed from the opposite
        classification, so the latest decision for a commit wins.

        Args:
            new_records: Records to stage
            classification: TRUST or DISTRUST
        """
        target = self._entries[classification]
        opposite = self._entries[classification.opposite]

        for record in new_records:
            target[record.commit_id] = record.summary
            opposite.pop(record.commit_id, None)
            self._known_ids.add(record.commit_id)

        logger.debug(
            "Index now holds %d trusted and %d distrusted commits",
            len(self._entries[Classification.TRUST]),
            len(self._entries[Classification.DISTRUST]),
        )

    def contains(self, commit_id: str) -> bool:
        """Return True if the commit has been classified either way."""
        return commit_id in self._known_ids

    def __contains__(self, commit_id: str) -> bool:
        return self.contains(commit_id)

    def classification_of(self, commit_id: str):
        """Return the Classification of a commit, or None if not staged."""
        for classification, entries in self._entries.items():
            if commit_id in entries:
                return classification
        return None

    def records(self, classification: Classification) -> List[CommitRecord]:
        """Records of one classification, ordered by commit id."""
        entries = self._entries[classification]
        return [CommitRecord(commit_id, entries[commit_id]) for commit_id in sorted(entries)]

    @property
    def trusted(self) -> List[CommitRecord]:
        return self.records(Classification.TRUST)

    @property
    def distrusted(self) -> List[CommitRecord]:
        return self.records(Classification.DISTRUST)

    @property
    def known_ids(self) -> Set[str]:
        return set(self._known_ids)

    def is_empty(self) -> bool:
        return not self._known_ids

    def __len__(self) -> int:
        return len(self._known_ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StagingIndex):
            return NotImplemented
        return self._entries == other._entries and self._known_ids == other._known_ids

    def __repr__(self) -> str:
        return (
            f"StagingIndex(trusted={len(self._entries[Classification.TRUST])}, "
            f"distrusted={len(self._entries[Classification.DISTRUST])})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        return {
            'version': INDEX_FORMAT_VERSION,
            'trusted': [record.to_dict() for record in self.trusted],
            'distrusted': [record.to_dict() for record in self.distrusted],
            'known_ids': sorted(self._known_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StagingIndex':
        """Deserialize from dictionary.

        The stored 'known_ids' list is not trusted; the set of known ids
        is always rebuilt from the two collections.

        Raises:
            ValueError: If the document does not match the index schema
        """
        if not isinstance(data, dict):
            raise ValueError("Index document is not a mapping")

        index = cls()
        for classification, key in (
            (Classification.TRUST, 'trusted'),
            (Classification.DISTRUST, 'distrusted'),
        ):
            raw = data.get(key, [])
            if raw is None:
                raw = []
            if not isinstance(raw, list):
                raise ValueError(f"'{key}' must be a list")
            records = []
            for entry in raw:
                if not isinstance(entry, dict) or 'commit_id' not in entry:
                    raise ValueError(f"Malformed index entry: {entry!r}")
                records.append(CommitRecord.from_dict(entry))
            index.insert(records, classification)
        return index


def load_index(path: Union[str, Path]) -> StagingIndex:
    """Load the staging index from disk.

    A missing, unreadable or malformed file is equivalent to an empty
    index; this function never fails because of the file's contents.

    Args:
        path: Path to the index file

    Returns:
        The loaded index, or an empty one
    """
    file_path = Path(path)
    if not file_path.exists():
        logger.debug("No index at %s, starting empty", file_path)
        return StagingIndex()

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return StagingIndex.from_dict(data)
    except OSError as exc:
        logger.warning("Could not read index %s: %s", file_path, exc)
        return StagingIndex()
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError, KeyError, TypeError) as exc:
        logger.warning("Ignoring unreadable index %s: %s", file_path, exc)
        return StagingIndex()


def save_index(index: StagingIndex, path: Union[str, Path]) -> None:
    """Write the full index to disk, replacing the previous file atomically.

    Args:
        index: Index to persist
        path: Path to the index file

    Raises:
        OSError: If the file cannot be written
    """
    file_path = Path(path)
    content = json.dumps(index.to_dict(), indent=2) + "\n"
    _atomic_write(file_path, content)
    logger.debug("Saved %r to %s", index, file_path)


def _atomic_write(path: Path, content: str) -> None:
    """Write to a temp file in the target directory and rename it over path."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except BaseException:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise
