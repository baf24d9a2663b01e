"""Base command class for git-crev CLI commands."""

import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Optional

from git.exc import GitCommandError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import StagingConfig
from ..errors import CrevError
from ..local import LocalRepository

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """Base class for all CLI commands.

    Provides console output helpers, repository access and the command
    execution lifecycle.
    """

    def __init__(self, config: StagingConfig, console: Optional[Console] = None):
        """Initialize command with configuration.

        Args:
            config: Options passed from the CLI
            console: Console for output (default: stdout)
        """
        self.config = config
        self.console = console or Console()
        self._local: Optional[LocalRepository] = None

    def validate(self) -> None:
        """Validate command options.

        Raises:
            click.UsageError: If validation fails
        """
        pass

    @abstractmethod
    def execute(self) -> Any:
        """Execute the command logic.

        Returns:
            Command result (varies by command type)
        """
        pass

    def run(self) -> Any:
        """Template method: validate then execute.

        Errors from the repository, git itself, the revision resolver and
        the file system end the process with status 1 after being reported.

        Returns:
            Result from execute()
        """
        self.validate()
        try:
            return self.execute()
        except (CrevError, GitCommandError, OSError) as e:
            logger.debug("Command failed", exc_info=True)
            self.print_error(f"Error: {e}")
            sys.exit(1)

    @property
    def local(self) -> LocalRepository:
        """Repository handle, opened (and state dir created) on first use."""
        if self._local is None:
            self._local = LocalRepository.open_or_create(
                self.config.repo_path,
                state_dir_name=self.config.state_dir_name,
                index_file_name=self.config.index_file_name,
            )
        return self._local

    def print_header(self, title: str) -> None:
        """Print a styled header."""
        self.console.print(f"\n[bold blue]{title}[/bold blue]\n")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]{escape(message)}[/green]")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)

    def create_table(self, title: Optional[str] = None) -> Table:
        """Create a Rich table with optional title."""
        return Table(title=title, show_header=True, header_style="bold cyan")
