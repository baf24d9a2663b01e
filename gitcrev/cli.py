"""Command-line interface for git-crev."""

import click

from . import __version__
from .commands import AddCommand, StatusCommand, ReviewCommand
from .config import (
    DEFAULT_REVISION,
    DEFAULT_DIFF_COMMAND,
    DIFF_COMMAND_ENVVAR,
    RENDERERS,
    StagingConfig,
)
from .log import configure_logging


@click.group()
@click.version_option(version=__version__)
@click.option('--repo', '-C', default=None,
              help="Run as if started in this directory (default: current directory)")
@click.option('--verbose', '-v', is_flag=True, default=False,
              help="Print debug logging to stderr")
@click.pass_context
def cli(ctx, repo, verbose):
    """git-crev - stage commits for a distributed code review.

    \b
    Mark commits as trusted or distrusted before they are turned into
    signed review proofs. Staged commits are kept in .crev/index inside
    the working tree, which is excluded from git automatically.

    \b
    Quick Start:
      git crev add --trust HEAD~3..HEAD
      git crev review
      git crev status
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj['repo'] = repo
    ctx.obj['verbose'] = verbose


ADD_HELP = """Stage commits as trusted or distrusted.

\b
REVISION_RANGE is either a single revision or a range FROM..TO. For a
range, every commit walked back from TO is staged until FROM is reached;
FROM itself is not staged. Defaults to HEAD.

\b
EXAMPLES:

  # Trust the current commit
  git crev add --trust

  # Distrust everything since the v1.0 tag
  git crev add --distrust v1.0..HEAD

  # Trust a single commit
  git crev add -t 3f2a91c
"""


@cli.command(help=ADD_HELP)
@click.argument('revision_range', default=DEFAULT_REVISION)
@click.option('--trust', '-t', is_flag=True, default=False,
              help="Stage the commits as trusted")
@click.option('--distrust', '-d', is_flag=True, default=False,
              help="Stage the commits as distrusted")
@click.option('--allow-unreachable', is_flag=True, default=False,
              help="When FROM is not an ancestor of TO, stage all of TO's history instead of failing")
@click.pass_context
def add(ctx, revision_range, trust, distrust, allow_unreachable):
    config = StagingConfig.from_cli_args(
        repo_path=ctx.obj['repo'],
        revision_range=revision_range,
        allow_unreachable=allow_unreachable,
        verbose=ctx.obj['verbose'],
    )
    AddCommand(config, trust=trust, distrust=distrust).run()


@cli.command()
@click.option('--format', 'output_format', default='text',
              type=click.Choice(['text', 'json'], case_sensitive=False),
              help='Output format (text or json)')
@click.pass_context
def status(ctx, output_format):
    """Show the commits staged as part of an ongoing review.

    \b
    Each entry shows the first 8 characters of the commit id and the first
    line of the commit message, cut at 100 characters.
    """
    config = StagingConfig.from_cli_args(
        repo_path=ctx.obj['repo'],
        output_format=output_format.lower(),
        verbose=ctx.obj['verbose'],
    )
    StatusCommand(config).run()


REVIEW_HELP = f"""Review unstaged commits one at a time.

\b
Walks history from START (default: HEAD). Every commit that is not staged
yet is shown, then you are asked for a decision:

  -s   skip this commit
  -t   stage it as trusted
  -d   stage it as distrusted

\b
Every decision is saved immediately. Press Ctrl+C to stop; decisions
already made are kept.

\b
The 'git' renderer runs "{DEFAULT_DIFF_COMMAND} <commit>" unless
--diff-command or ${DIFF_COMMAND_ENVVAR} says otherwise. The 'rich'
renderer highlights the patch in-process.
"""


@cli.command(help=REVIEW_HELP)
@click.option('--renderer', type=click.Choice(RENDERERS), default='git',
              help="How commits are shown (default: git)")
@click.option('--diff-command', envvar=DIFF_COMMAND_ENVVAR, default=None,
              help=f"Command used by the git renderer (default: '{DEFAULT_DIFF_COMMAND}')")
@click.option('--start', default=DEFAULT_REVISION,
              help="Revision to start walking history from (default: HEAD)")
@click.pass_context
def review(ctx, renderer, diff_command, start):
    config = StagingConfig.from_cli_args(
        repo_path=ctx.obj['repo'],
        renderer=renderer,
        diff_command=diff_command,
        start=start,
        verbose=ctx.obj['verbose'],
    )
    ReviewCommand(config).run()


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
