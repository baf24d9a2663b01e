"""gitcrev - stage git commits for a distributed code review."""

__version__ = "0.1.0"

from .errors import (
    CrevError,
    NotARepository,
    NoWorkingDirectory,
    InvalidRevisionSpec,
    UnreachableRevision,
)
from .index import Classification, CommitRecord, StagingIndex, load_index, save_index
from .local import LocalRepository
from .revisions import RevisionResolver
from .render import DiffRenderer, GitDiffRenderer, RichDiffRenderer
from .review import InteractiveReviewLoop, ReviewDecision, ReviewSummary

__all__ = [
    "__version__",
    # Errors
    "CrevError",
    "NotARepository",
    "NoWorkingDirectory",
    "InvalidRevisionSpec",
    "UnreachableRevision",
    # Index
    "Classification",
    "CommitRecord",
    "StagingIndex",
    "load_index",
    "save_index",
    # Repository
    "LocalRepository",
    "RevisionResolver",
    # Review
    "DiffRenderer",
    "GitDiffRenderer",
    "RichDiffRenderer",
    "InteractiveReviewLoop",
    "ReviewDecision",
    "ReviewSummary",
]
