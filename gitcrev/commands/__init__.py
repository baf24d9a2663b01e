"""git-crev CLI commands module.

Each command is a small class built on BaseCommand so the click layer in
cli.py only parses options.
"""

from .base import BaseCommand
from .add import AddCommand
from .status import StatusCommand
from .review import ReviewCommand

__all__ = [
    'BaseCommand',
    'AddCommand',
    'StatusCommand',
    'ReviewCommand',
]
