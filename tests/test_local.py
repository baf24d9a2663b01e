"""Tests for LocalRepository."""

import os
import shutil
from pathlib import Path

import pytest
from git import Repo

from gitcrev.errors import NotARepository, NoWorkingDirectory
from gitcrev.local import LocalRepository


class TestOpenOrCreate:
    """Tests for opening the repository and creating the state directory."""

    def test_creates_state_dir_and_exclude(self, linear_repo):
        repo = linear_repo[0]
        local = LocalRepository.open_or_create(repo.working_tree_dir)

        assert local.root_path.is_dir()
        assert local.root_path.name == ".crev"
        assert local.index_path == local.root_path / "index"
        assert ".crev" in local.exclude_path.read_text().splitlines()

    def test_exclude_not_duplicated(self, linear_repo):
        repo = linear_repo[0]
        local = LocalRepository.open_or_create(repo.working_tree_dir)
        shutil.rmtree(local.root_path)
        LocalRepository.open_or_create(repo.working_tree_dir)

        lines = [l.strip() for l in local.exclude_path.read_text().splitlines()]
        assert lines.count(".crev") == 1

    def test_existing_entry_with_whitespace_is_recognised(self, linear_repo):
        repo = linear_repo[0]
        local = LocalRepository.open(repo.working_tree_dir)
        local.exclude_path.parent.mkdir(parents=True, exist_ok=True)
        local.exclude_path.write_text("*.log\n  .crev  \n")

        assert local.ensure_excluded() is False
        assert local.exclude_path.read_text() == "*.log\n  .crev  \n"

    def test_appends_on_new_line(self, linear_repo):
        repo = linear_repo[0]
        local = LocalRepository.open(repo.working_tree_dir)
        local.exclude_path.parent.mkdir(parents=True, exist_ok=True)
        local.exclude_path.write_text("*.log")

        assert local.ensure_excluded() is True
        assert local.exclude_path.read_text() == "*.log\n.crev\n"

    def test_missing_exclude_file_is_created(self, linear_repo):
        repo = linear_repo[0]
        local = LocalRepository.open(repo.working_tree_dir)
        shutil.rmtree(local.exclude_path.parent, ignore_errors=True)

        LocalRepository.open_or_create(repo.working_tree_dir)

        assert local.exclude_path.read_text() == ".crev\n"

    def test_state_dir_is_ignored_by_git(self, linear_repo):
        repo = linear_repo[0]
        local = LocalRepository.open_or_create(repo.working_tree_dir)
        local.index_path.write_text("{}")

        assert repo.untracked_files == []

    def test_found_from_subdirectory(self, linear_repo):
        repo = linear_repo[0]
        subdir = os.path.join(repo.working_tree_dir, "nested", "deeper")
        os.makedirs(subdir)

        local = LocalRepository.open_or_create(subdir)

        assert local.working_dir.resolve() == Path(repo.working_tree_dir).resolve()

    def test_not_a_repository(self, tmp_path):
        with pytest.raises(NotARepository):
            LocalRepository.open_or_create(tmp_path / "missing")

    def test_bare_repository(self, tmp_path):
        Repo.init(tmp_path / "bare.git", bare=True)
        with pytest.raises(NoWorkingDirectory):
            LocalRepository.open_or_create(tmp_path / "bare.git")

    def test_linked_worktree_uses_shared_exclude(self, linear_repo, tmp_path):
        repo = linear_repo[0]
        worktree_dir = tmp_path / "wt"
        repo.git.worktree("add", str(worktree_dir), "HEAD~1")

        local = LocalRepository.open_or_create(worktree_dir)
        local.index_path.write_text("{}")

        assert local.exclude_path.resolve() == (Path(repo.git_dir) / "info" / "exclude").resolve()
        assert Repo(worktree_dir).untracked_files == []
