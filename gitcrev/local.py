"""Access to the enclosing git repository and its local gitcrev state."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from git import Repo, InvalidGitRepositoryError, NoSuchPathError

from .config import STATE_DIR_NAME, INDEX_FILE_NAME
from .errors import NotARepository, NoWorkingDirectory

logger = logging.getLogger(__name__)


class LocalRepository:
    """The git repository gitcrev operates on, plus its state directory.

    The state directory lives at the root of the working tree and is kept
    out of the repository's change tracking through ``info/exclude``.
    """

    def __init__(self, repository: Repo, state_dir_name: str = STATE_DIR_NAME,
                 index_file_name: str = INDEX_FILE_NAME):
        if repository.bare or repository.working_tree_dir is None:
            raise NoWorkingDirectory(str(repository.git_dir))

        self.repository = repository
        self.state_dir_name = state_dir_name
        self.working_dir = Path(repository.working_tree_dir)
        self.root_path = self.working_dir / state_dir_name
        self.index_path = self.root_path / index_file_name

    @classmethod
    def open(cls, path: Optional[Union[str, Path]] = None, **kwargs) -> 'LocalRepository':
        """Open the repository enclosing path without touching the state dir.

        Args:
            path: Directory to start searching from (default: GIT_DIR or cwd)

        Raises:
            NotARepository: If no repository encloses path
            NoWorkingDirectory: If the repository is bare
        """
        search_path = str(path) if path is not None else None
        try:
            repository = Repo(search_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise NotARepository(search_path or os.getcwd())

        return cls(repository, **kwargs)

    @classmethod
    def open_or_create(cls, path: Optional[Union[str, Path]] = None, **kwargs) -> 'LocalRepository':
        """Open the enclosing repository and create the state dir if needed.

        Raises:
            NotARepository: If no repository encloses path
            NoWorkingDirectory: If the repository is bare
        """
        local = cls.open(path, **kwargs)
        if not local.root_path.exists():
            logger.debug("Creating state directory %s", local.root_path)
            local.root_path.mkdir(parents=True, exist_ok=True)
            local.ensure_excluded()
        return local

    @property
    def exclude_path(self) -> Path:
        """Exclude file git reads for this working tree.

        Linked worktrees share the main repository's exclude file.
        """
        return Path(self.repository.common_dir) / "info" / "exclude"

    def ensure_excluded(self) -> bool:
        """Register the state directory in the local exclude file.

        Existing lines are compared after stripping whitespace, so repeated
        runs never add a duplicate entry.

        Returns:
            True if the pattern was appended, False if already present
        """
        exclude_path = self.exclude_path
        exclude_path.parent.mkdir(parents=True, exist_ok=True)

        content = ""
        if exclude_path.exists():
            content = exclude_path.read_text(encoding='utf-8')
            for line in content.splitlines():
                if line.strip() == self.state_dir_name:
                    return False

        with open(exclude_path, 'a', encoding='utf-8') as f:
            if content and not content.endswith('\n'):
                f.write('\n')
            f.write(f"{self.state_dir_name}\n")

        logger.debug("Added %s to %s", self.state_dir_name, exclude_path)
        return True

    def __repr__(self) -> str:
        return f"LocalRepository({str(self.working_dir)!r})"
