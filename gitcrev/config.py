"""Configuration for a single gitcrev invocation."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


STATE_DIR_NAME = ".crev"
INDEX_FILE_NAME = "index"
INDEX_FORMAT_VERSION = 2

SHORT_ID_LENGTH = 8
SUMMARY_TRUNCATE_LENGTH = 100

DEFAULT_REVISION = "HEAD"
DEFAULT_DIFF_COMMAND = "git log --patch -1"
DIFF_COMMAND_ENVVAR = "GITCREV_DIFF_COMMAND"

RENDERERS = ("git", "rich")


@dataclass(frozen=True)
class StagingConfig:
    """Immutable configuration for one command run.

    The index path is derived from the repository's working tree at run
    time, so only the names of the state directory and index file live here.
    """

    repo_path: Optional[Path] = None
    state_dir_name: str = STATE_DIR_NAME
    index_file_name: str = INDEX_FILE_NAME

    # add
    revision_range: str = DEFAULT_REVISION
    allow_unreachable: bool = False

    # review
    renderer: str = "git"
    diff_command: str = DEFAULT_DIFF_COMMAND
    start: str = DEFAULT_REVISION

    # status
    output_format: str = "text"

    verbose: bool = False

    @classmethod
    def from_cli_args(
        cls,
        repo_path: Optional[str] = None,
        revision_range: str = DEFAULT_REVISION,
        allow_unreachable: bool = False,
        renderer: str = "git",
        diff_command: Optional[str] = None,
        start: str = DEFAULT_REVISION,
        output_format: str = "text",
        verbose: bool = False,
    ) -> 'StagingConfig':
        """Factory method to create config from CLI arguments.

        Args:
            repo_path: Directory to start the repository search from
            revision_range: Revision specification for 'add'
            allow_unreachable: Stage the full walk when a range start is
                not an ancestor of its end
            renderer: Diff renderer name ('git' or 'rich')
            diff_command: External diff command for the 'git' renderer
            start: Revision the review walk starts from
            output_format: 'text' or 'json' for 'status'
            verbose: Enable debug logging

        Returns:
            Configured StagingConfig instance
        """
        return cls(
            repo_path=Path(repo_path) if repo_path else None,
            revision_range=revision_range or DEFAULT_REVISION,
            allow_unreachable=allow_unreachable,
            renderer=renderer,
            diff_command=diff_command or DEFAULT_DIFF_COMMAND,
            start=start or DEFAULT_REVISION,
            output_format=output_format,
            verbose=verbose,
        )
