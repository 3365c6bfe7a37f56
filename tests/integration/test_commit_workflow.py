"""Integration tests for add and commit workflow."""

from click.testing import CliRunner
from devdiary.cli.main import cli


def test_add_prints_digest(repo, write_file, monkeypatch):
    monkeypatch.chdir(repo.work_tree)
    write_file(repo, 'f.txt', 'v1\n')

    result = CliRunner().invoke(cli, ['add', 'f.txt'])

    assert result.exit_code == 0
    [entry] = repo.status()
    assert entry.digest in result.output
    assert 'Added 1 file(s)' in result.output


def test_add_from_subdirectory_records_repo_path(repo, write_file, monkeypatch):
    write_file(repo, 'src/app.py', 'print(1)\n')
    monkeypatch.chdir(repo.work_tree / 'src')

    result = CliRunner().invoke(cli, ['add', 'app.py'])

    assert result.exit_code == 0
    assert [e.path for e in repo.status()] == ['src/app.py']


def test_add_parent_relative_path_matches_root_path(repo, write_file, monkeypatch):
    runner = CliRunner()
    write_file(repo, 'f.txt', 'v1\n')
    (repo.work_tree / 'sub').mkdir()

    monkeypatch.chdir(repo.work_tree)
    runner.invoke(cli, ['add', 'f.txt'])
    runner.invoke(cli, ['commit', '-m', 'first'])

    write_file(repo, 'f.txt', 'v2\n')
    monkeypatch.chdir(repo.work_tree / 'sub')
    result = runner.invoke(cli, ['add', '../f.txt'])

    assert result.exit_code == 0
    assert [e.path for e in repo.status()] == ['f.txt']

    runner.invoke(cli, ['commit', '-m', 'second'])
    shown = runner.invoke(cli, ['show', '--no-color'])
    assert '--v1' in shown.output
    assert '++v2' in shown.output


def test_add_missing_file_fails_without_staging(repo, monkeypatch):
    monkeypatch.chdir(repo.work_tree)

    result = CliRunner().invoke(cli, ['add', 'ghost.txt'])

    assert result.exit_code != 0
    assert 'File not found' in result.output
    assert repo.status() == []


def test_commit_with_option_and_positional(repo, write_file, monkeypatch):
    monkeypatch.chdir(repo.work_tree)
    runner = CliRunner()

    write_file(repo, 'f.txt', 'v1\n')
    runner.invoke(cli, ['add', 'f.txt'])
    first = runner.invoke(cli, ['commit', '-m', 'first'])
    assert first.exit_code == 0
    assert 'root commit' in first.output

    write_file(repo, 'f.txt', 'v2\n')
    runner.invoke(cli, ['add', 'f.txt'])
    second = runner.invoke(cli, ['commit', 'second'])
    assert second.exit_code == 0
    assert repo.head() in second.output

    assert [e.message for e in repo.log()] == ['second', 'first']


def test_commit_requires_message(repo, monkeypatch):
    monkeypatch.chdir(repo.work_tree)
    result = CliRunner().invoke(cli, ['commit'])

    assert result.exit_code != 0
    assert 'Commit message required' in result.output
    assert repo.head() is None


def test_commit_empty_allowed_by_default(repo, monkeypatch):
    monkeypatch.chdir(repo.work_tree)
    result = CliRunner().invoke(cli, ['commit', '-m', 'empty'])

    assert result.exit_code == 0
    assert 'No files were staged' in result.output
    assert repo.head() is not None


def test_commit_no_allow_empty(repo, monkeypatch):
    monkeypatch.chdir(repo.work_tree)
    result = CliRunner().invoke(cli, ['commit', '--no-allow-empty', '-m', 'empty'])

    assert result.exit_code != 0
    assert 'Nothing to commit' in result.output
    assert repo.head() is None


def test_status_lists_staged_and_duplicates(repo, write_file, monkeypatch):
    monkeypatch.chdir(repo.work_tree)
    runner = CliRunner()
    write_file(repo, 'f.txt', 'one\n')
    runner.invoke(cli, ['add', 'f.txt'])
    runner.invoke(cli, ['add', 'f.txt'])

    result = runner.invoke(cli, ['status'])

    assert result.exit_code == 0
    assert '(no commits yet)' in result.output
    assert result.output.count('f.txt') >= 2
    assert 'Staged more than once: f.txt' in result.output


def test_status_empty(repo, monkeypatch):
    monkeypatch.chdir(repo.work_tree)
    result = CliRunner().invoke(cli, ['status'])
    assert 'Nothing staged' in result.output


def test_corrupt_index_is_reported(repo, monkeypatch):
    monkeypatch.chdir(repo.work_tree)
    repo.index_file.write_text('{not json')

    result = CliRunner().invoke(cli, ['status'])

    assert result.exit_code != 0
    assert 'Malformed index' in result.output
