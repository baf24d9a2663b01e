"""
Interactive review of unstaged history.

Walks the repository's ancestry from a starting revision, shows every
commit that has not been classified yet and records the reviewer's
decision in the staging index. The index is saved after each decision, so
an interrupted review loses nothing that was already decided.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import click
from rich.console import Console
from rich.markup import escape

from .config import DEFAULT_REVISION
from .index import Classification, CommitRecord, load_index, save_index
from .local import LocalRepository
from .render import DiffRenderer
from .revisions import RevisionResolver

logger = logging.getLogger(__name__)

PROMPT_TEXT = "Review (skip:-s; trust:-t; distrust:-d)"


class ReviewDecision(Enum):
    """What the reviewer decided for the commit on screen."""
    SKIP = "-s"
    TRUST = "-t"
    DISTRUST = "-d"

    @property
    def classification(self) -> Optional[Classification]:
        return {
            ReviewDecision.TRUST: Classification.TRUST,
            ReviewDecision.DISTRUST: Classification.DISTRUST,
        }.get(self)


def parse_decision(line: str) -> Optional[ReviewDecision]:
    """Parse one line of reviewer input; None if it is not a decision."""
    try:
        return ReviewDecision(line.strip())
    except ValueError:
        return None


def _default_prompt(text: str) -> str:
    return click.prompt(text, default="", show_default=False, prompt_suffix=": ")


@dataclass
class ReviewSummary:
    """Counts of what happened during one review session."""
    trusted: int = 0
    distrusted: int = 0
    skipped: int = 0
    already_known: int = 0

    @property
    def decided(self) -> int:
        return self.trusted + self.distrusted


class InteractiveReviewLoop:
    """Prompts for a decision on every commit not yet in the index."""

    def __init__(
        self,
        local: LocalRepository,
        renderer: DiffRenderer,
        prompt: Optional[Callable[[str], str]] = None,
        console: Optional[Console] = None,
    ):
        """
        Args:
            local: Repository and state directory to review
            renderer: Shows each commit before the prompt
            prompt: Reads one line of input given a prompt text
            console: Console for messages (default: stderr)
        """
        self.local = local
        self.renderer = renderer
        self.prompt = prompt or _default_prompt
        self.console = console or Console(stderr=True)

    def run(self, start: str = DEFAULT_REVISION) -> ReviewSummary:
        """Review history reachable from start until it is exhausted.

        Returns:
            ReviewSummary for this session

        Raises:
            InvalidRevisionSpec: If start does not name a commit
        """
        head = RevisionResolver(self.local.repository).lookup(start)
        index_path = self.local.index_path
        index = load_index(index_path)
        summary = ReviewSummary()

        for commit in self.local.repository.iter_commits(head.hexsha):
            commit_id = commit.hexsha
            if index.contains(commit_id):
                summary.already_known += 1
                continue

            self.renderer.render_diff(commit_id)
            decision = self.read_decision()

            if decision is ReviewDecision.SKIP:
                logger.debug("Skipped %s", commit_id)
                summary.skipped += 1
                continue

            index.insert([CommitRecord.from_commit(commit)], decision.classification)
            save_index(index, index_path)

            if decision is ReviewDecision.TRUST:
                summary.trusted += 1
            else:
                summary.distrusted += 1
            logger.debug("Staged %s as %s", commit_id, decision.classification.value)

        return summary

    def read_decision(self) -> ReviewDecision:
        """Prompt until the reviewer enters a valid decision."""
        while True:
            line = self.prompt(PROMPT_TEXT).strip()
            if not line:
                continue
            decision = parse_decision(line)
            if decision is not None:
                return decision
            self.console.print(f"[red]Invalid command: {escape(line)}[/red]")
