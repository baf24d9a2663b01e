"""Shared fixtures: throwaway git repositories built with GitPython."""

from pathlib import Path

import pytest
from git import Actor, Repo

AUTHOR = Actor("Test Author", "author@example.com")
BASE_TIMESTAMP = 1704103200


def make_commit(repo: Repo, filename: str, message: str, offset: int):
    """Write a file and commit it with a fixed, increasing date."""
    path = Path(repo.working_tree_dir) / filename
    path.write_text(f"{message}\n")
    repo.index.add([filename])
    date = f"{BASE_TIMESTAMP + offset * 60} +0000"
    return repo.index.commit(
        message,
        author=AUTHOR,
        committer=AUTHOR,
        author_date=date,
        commit_date=date,
    )


@pytest.fixture
def linear_repo(tmp_path):
    """Repository with history A -> B -> C, C being HEAD."""
    repo = Repo.init(tmp_path / "repo")
    with repo.config_writer() as config:
        config.set_value("user", "name", AUTHOR.name)
        config.set_value("user", "email", AUTHOR.email)
    a = make_commit(repo, "a.txt", "Add a\n\nFirst commit body.", 0)
    b = make_commit(repo, "b.txt", "Add b", 1)
    c = make_commit(repo, "c.txt", "Add c", 2)
    return repo, a, b, c
