"""Shared pytest fixtures for DevDiary tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from devdiary.core.config import Config
from devdiary.core.repository import Repository


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the real ~/.devdiaryconfig and DEVDIARY_* variables."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.devdiaryconfig')
    for key in ('DEVDIARY_COLOR_UI', 'DEVDIARY_INDEX_DUPLICATES'):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


def _write(repo, name, content):
    """Write a file into the repository work tree and return its path."""
    path = repo.work_tree / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def write_file():
    """Helper writing a file into a repository work tree."""
    return _write


@pytest.fixture
def repo_with_commits(repo):
    """
    Repository with two commits touching notes.txt.

    The first commit records "v1\\n", the second "v2\\n". The digests
    are available as repo.first and repo.second.
    """
    _write(repo, 'notes.txt', 'v1\n')
    repo.add('notes.txt')
    repo.first = repo.commit('first')

    _write(repo, 'notes.txt', 'v2\n')
    repo.add('notes.txt')
    repo.second = repo.commit('second')

    return repo


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    return {
        'file1': _write(repo, 'test1.txt', 'Content 1\n'),
        'file2': _write(repo, 'test2.txt', 'Content 2\n'),
        'file3': _write(repo, 'subdir/test3.txt', 'Content 3\n'),
    }
