"""Diff renderers used by the interactive review.

A renderer shows one commit to the reviewer and returns only once the
reviewer is done looking at it.
"""

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from git import Repo
from rich.console import Console
from rich.syntax import Syntax

from .config import DEFAULT_DIFF_COMMAND

logger = logging.getLogger(__name__)


class DiffRenderer(ABC):
    """Shows a single commit's diff to the reviewer."""

    @abstractmethod
    def render_diff(self, commit_id: str) -> None:
        """Display the commit and block until it has been shown."""
        pass


class GitDiffRenderer(DiffRenderer):
    """Hands the terminal to an external command, `git log --patch -1` by default."""

    def __init__(self, working_dir: Union[str, Path], command: Optional[str] = None):
        self.working_dir = str(working_dir)
        self.command = command or DEFAULT_DIFF_COMMAND

    def build_command(self, commit_id: str) -> List[str]:
        return shlex.split(self.command) + [commit_id]

    def render_diff(self, commit_id: str) -> None:
        args = self.build_command(commit_id)
        logger.debug("Running %s", " ".join(args))
        result = subprocess.run(args, cwd=self.working_dir)
        if result.returncode != 0:
            logger.warning("%s exited with status %d", args[0], result.returncode)


class RichDiffRenderer(DiffRenderer):
    """Renders the commit in-process with syntax highlighting."""

    def __init__(self, repository: Repo, console: Optional[Console] = None,
                 use_pager: bool = True):
        self.repository = repository
        self.console = console or Console()
        self.use_pager = use_pager

    def render_diff(self, commit_id: str) -> None:
        commit = self.repository.commit(commit_id)
        patch = self.repository.git.show(commit.hexsha, format="", patch=True)

        if self.use_pager:
            with self.console.pager(styles=True):
                self._print(commit, patch)
        else:
            self._print(commit, patch)

    def _print(self, commit, patch: str) -> None:
        self.console.print(f"[yellow]commit {commit.hexsha}[/yellow]")
        self.console.print(f"Author: {commit.author.name} <{commit.author.email}>", markup=False)
        self.console.print(f"Date:   {commit.committed_datetime.isoformat()}")
        self.console.print()
        for line in commit.message.strip().splitlines():
            self.console.print(f"    {line}", markup=False)
        self.console.print()
        if patch.strip():
            self.console.print(Syntax(patch, "diff", theme="ansi_dark", word_wrap=True))
