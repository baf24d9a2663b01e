"""End-to-end tests for the git-crev command line."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner
from git.exc import GitCommandError

from gitcrev import __version__
from gitcrev.cli import cli
from gitcrev.index import load_index
from gitcrev.local import LocalRepository


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, repo, *args, **kwargs):
    return runner.invoke(cli, ['--repo', repo.working_tree_dir] + list(args), **kwargs)


def staged_index(repo):
    return load_index(LocalRepository.open(repo.working_tree_dir).index_path)


class TestAdd:
    """Tests for 'git-crev add'."""

    def test_trust_head_by_default(self, runner, linear_repo):
        repo, a, b, c = linear_repo
        result = invoke(runner, repo, 'add', '--trust')

        assert result.exit_code == 0, result.output
        assert "Staged 1 commit as trusted." in result.output
        assert [r.commit_id for r in staged_index(repo).trusted] == [c.hexsha]

    def test_distrust_range(self, runner, linear_repo):
        repo, a, b, c = linear_repo
        result = invoke(runner, repo, 'add', '-d', f'{a.hexsha}..HEAD')

        assert result.exit_code == 0, result.output
        assert "Staged 2 commits as distrusted." in result.output
        index = staged_index(repo)
        assert {r.commit_id for r in index.distrusted} == {b.hexsha, c.hexsha}
        assert not index.contains(a.hexsha)

    def test_reclassification(self, runner, linear_repo):
        repo, a, b, c = linear_repo
        invoke(runner, repo, 'add', '-t', 'HEAD~2..HEAD')
        result = invoke(runner, repo, 'add', '-d', 'HEAD~1')

        assert result.exit_code == 0, result.output
        index = staged_index(repo)
        assert [r.commit_id for r in index.trusted] == [c.hexsha]
        assert [r.commit_id for r in index.distrusted] == [b.hexsha]

    def test_requires_a_flag(self, runner, linear_repo):
        repo = linear_repo[0]
        result = invoke(runner, repo, 'add')

        assert result.exit_code == 2
        assert "One of --trust or --distrust must be specified." in result.output

    def test_rejects_both_flags(self, runner, linear_repo):
        repo = linear_repo[0]
        result = invoke(runner, repo, 'add', '-t', '-d')

        assert result.exit_code == 2
        assert staged_index(repo).is_empty()

    def test_invalid_revision(self, runner, linear_repo):
        repo = linear_repo[0]
        result = invoke(runner, repo, 'add', '-t', 'no-such-branch')

        assert result.exit_code == 1
        assert "Could not parse given revision specification: no-such-branch" in result.output

    def test_unreachable_range(self, runner, linear_repo):
        repo, a, b, c = linear_repo
        result = invoke(runner, repo, 'add', '-t', f'{c.hexsha}..{a.hexsha}')
        assert result.exit_code == 1
        assert "--allow-unreachable" in result.output

        result = invoke(runner, repo, 'add', '-t', '--allow-unreachable',
                        f'{c.hexsha}..{a.hexsha}')
        assert result.exit_code == 0, result.output
        assert [r.commit_id for r in staged_index(repo).trusted] == [a.hexsha]

    def test_not_a_repository(self, runner, tmp_path):
        result = runner.invoke(cli, ['--repo', str(tmp_path / 'nowhere'), 'add', '-t'])
        assert result.exit_code == 1
        assert "does not seem to be within a Git repository" in result.output

    def test_git_failure_is_reported(self, runner, linear_repo):
        repo = linear_repo[0]
        failure = GitCommandError(['git', 'rev-list', 'HEAD'], 128, stderr='missing parent')
        with patch('gitcrev.commands.add.RevisionResolver.resolve', side_effect=failure):
            result = invoke(runner, repo, 'add', '-t')

        assert result.exit_code == 1
        assert 'Error:' in result.output
        assert 'missing parent' in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestStatus:
    """Tests for 'git-crev status'."""

    def test_lists_staged_commits(self, runner, linear_repo):
        repo, a, b, c = linear_repo
        invoke(runner, repo, 'add', '-t', 'HEAD')
        invoke(runner, repo, 'add', '-d', 'HEAD~1')

        result = invoke(runner, repo, 'status')

        assert result.exit_code == 0, result.output
        assert f"{c.hexsha[:8]}  Add c" in result.output
        assert f"{b.hexsha[:8]}  Add b" in result.output
        assert result.output.index("Trusted:") < result.output.index(c.hexsha[:8])
        assert result.output.index("Distrusted:") < result.output.index(b.hexsha[:8])

    def test_json_format(self, runner, linear_repo):
        repo, a, b, c = linear_repo
        invoke(runner, repo, 'add', '-t')

        result = invoke(runner, repo, 'status', '--format', 'json')

        assert result.exit_code == 0, result.output
        assert f'"commit_id": "{c.hexsha}"' in result.output


class TestReview:
    """Tests for 'git-crev review'."""

    def test_review_session(self, runner, linear_repo):
        repo, a, b, c = linear_repo
        result = invoke(runner, repo, 'review', '--diff-command', 'true',
                        input="-t\nwhat\n-d\n-s\n")

        assert result.exit_code == 0, result.output
        assert "Invalid command: what" in result.output
        assert "Review Complete" in result.output
        index = staged_index(repo)
        assert [r.commit_id for r in index.trusted] == [c.hexsha]
        assert [r.commit_id for r in index.distrusted] == [b.hexsha]

    def test_diff_command_from_environment(self, runner, linear_repo):
        repo = linear_repo[0]
        result = invoke(runner, repo, 'review', input="-s\n-s\n-s\n",
                        env={'GITCREV_DIFF_COMMAND': 'true'})

        assert result.exit_code == 0, result.output
        assert staged_index(repo).is_empty()

    def test_end_of_input_aborts(self, runner, linear_repo):
        repo, a, b, c = linear_repo
        result = invoke(runner, repo, 'review', '--diff-command', 'true', input="-t\n")

        assert result.exit_code == 1
        assert [r.commit_id for r in staged_index(repo).trusted] == [c.hexsha]


def test_version(runner):
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert __version__ in result.output
