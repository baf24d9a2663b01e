"""Exceptions raised by gitcrev.

Index parse problems are deliberately absent: a corrupt or missing index
is loaded as an empty one.
"""


class CrevError(Exception):
    """Base class for gitcrev errors."""
    pass


class NotARepository(CrevError):
    """Raised when the current location is not inside a git repository."""

    def __init__(self, path: str):
        super().__init__(
            f"{path} does not seem to be within a Git repository."
        )
        self.path = path


class NoWorkingDirectory(CrevError):
    """Raised when the repository has no checked-out working tree (bare)."""

    def __init__(self, git_dir: str):
        super().__init__(f"Could not find Git working directory for {git_dir}.")
        self.git_dir = git_dir


class InvalidRevisionSpec(CrevError):
    """Raised when a revision specification cannot be resolved to commits."""

    def __init__(self, spec: str, message: str = None):
        super().__init__(
            message or f"Could not parse given revision specification: {spec}"
        )
        self.spec = spec


class UnreachableRevision(InvalidRevisionSpec):
    """Raised when the start of a range is not an ancestor of its end."""

    def __init__(self, spec: str, from_rev: str):
        super().__init__(
            spec,
            f"'{from_rev}' is not an ancestor of the end of range '{spec}' "
            f"(use --allow-unreachable to stage the whole walked history)",
        )
        self.from_rev = from_rev
