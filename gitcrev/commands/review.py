"""Interactive review command implementation."""

from .base import BaseCommand
from ..render import DiffRenderer, GitDiffRenderer, RichDiffRenderer
from ..review import InteractiveReviewLoop, ReviewSummary


class ReviewCommand(BaseCommand):
    """Walk unreviewed history and classify one commit at a time.

    Each commit not yet in the index is shown with the configured renderer,
    then the reviewer answers -s (skip), -t (trust) or -d (distrust).
    """

    def create_renderer(self) -> DiffRenderer:
        if self.config.renderer == 'rich':
            return RichDiffRenderer(self.local.repository, console=self.console)
        return GitDiffRenderer(self.local.working_dir, command=self.config.diff_command)

    def execute(self) -> ReviewSummary:
        loop = InteractiveReviewLoop(self.local, self.create_renderer())
        summary = loop.run(start=self.config.start)
        self._display_results(summary)
        return summary

    def _display_results(self, summary: ReviewSummary) -> None:
        self.print_header("Review Complete")

        table = self.create_table()
        table.add_column("Decision", style="cyan")
        table.add_column("Commits", justify="right", style="green")

        table.add_row("Trusted", str(summary.trusted))
        table.add_row("Distrusted", str(summary.distrusted))
        table.add_row("Skipped", str(summary.skipped))
        table.add_row("Already staged", str(summary.already_known))

        self.console.print(table)
        if summary.decided:
            self.console.print('\nRun [green]git crev status[/green] to see the staged commits.')
