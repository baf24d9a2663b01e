"""Status command implementation."""

import json
from typing import List

from rich.markup import escape

from .base import BaseCommand
from ..config import SHORT_ID_LENGTH, SUMMARY_TRUNCATE_LENGTH
from ..index import CommitRecord, StagingIndex, load_index


def truncate_summary(summary: str, length: int = SUMMARY_TRUNCATE_LENGTH) -> str:
    """Cut a summary to length characters, marking the cut with '...'."""
    if len(summary) > length:
        return summary[:length] + "..."
    return summary


def format_entry(record: CommitRecord) -> str:
    """Render a record as '<short id>  <summary>'."""
    return f"{record.commit_id[:SHORT_ID_LENGTH]}  {truncate_summary(record.summary)}"


class StatusCommand(BaseCommand):
    """Show the commits staged as part of an ongoing review."""

    def execute(self) -> StagingIndex:
        index = load_index(self.local.index_path)

        if self.config.output_format == 'json':
            print(json.dumps(index.to_dict(), indent=2))
        else:
            self._display_text_status(index)
        return index

    def _display_text_status(self, index: StagingIndex) -> None:
        self.console.print("Commits staged as part of an ongoing review.")
        self.console.print('\t(use "git crev commit" to commit the review)\n', markup=False)

        self.console.print("[bold green]Trusted:[/bold green]\n")
        self._print_records(index.trusted)
        self.console.print("\n")
        self.console.print("[bold red]Distrusted:[/bold red]\n")
        self._print_records(index.distrusted)
        self.console.print()

    def _print_records(self, records: List[CommitRecord]) -> None:
        for record in records:
            self.console.print(f"\t{escape(format_entry(record))}", highlight=False, soft_wrap=True)
