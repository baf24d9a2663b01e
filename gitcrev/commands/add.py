"""Add command implementation."""

import logging

import click

from .base import BaseCommand
from ..config import StagingConfig
from ..index import Classification, load_index, save_index
from ..revisions import RevisionResolver

logger = logging.getLogger(__name__)


class AddCommand(BaseCommand):
    """Stage the commits of a revision range as trusted or distrusted."""

    def __init__(self, config: StagingConfig, trust: bool = False,
                 distrust: bool = False, **kwargs):
        super().__init__(config, **kwargs)
        self.trust = trust
        self.distrust = distrust

    def validate(self) -> None:
        """Exactly one of --trust and --distrust must be given."""
        if self.trust == self.distrust:
            raise click.UsageError("One of --trust or --distrust must be specified.")

    @property
    def classification(self) -> Classification:
        return Classification.TRUST if self.trust else Classification.DISTRUST

    def execute(self):
        """Resolve the revision range and stage every commit in it."""
        spec = self.config.revision_range
        resolver = RevisionResolver(self.local.repository)
        records = resolver.resolve(spec, allow_unreachable=self.config.allow_unreachable)

        index_path = self.local.index_path
        index = load_index(index_path)
        index.insert(records, self.classification)
        save_index(index, index_path)

        label = "trusted" if self.classification is Classification.TRUST else "distrusted"
        noun = "commit" if len(records) == 1 else "commits"
        self.print_success(f"Staged {len(records)} {noun} as {label}.")
        return records
