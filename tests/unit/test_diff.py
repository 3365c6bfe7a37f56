"""Unit tests for diff engine."""

import pytest
from itertools import product
from devdiary.operations.diff import (
    DiffEngine, DiffKind, DiffPart, ChangeStatus, diff, split_lines, stats,
)


def kinds(parts):
    return [(part.kind, part.text) for part in parts]


def rebuild(parts, *keep):
    return ''.join(part.text for part in parts if part.kind in keep)


def test_split_lines_keeps_newlines():
    assert split_lines('a\nb\n') == ['a\n', 'b\n']
    assert split_lines('a\nb') == ['a\n', 'b']
    assert split_lines('') == []
    assert split_lines('\n\n') == ['\n', '\n']


def test_split_lines_only_on_newline():
    assert split_lines('a\rb\x0cc\n') == ['a\rb\x0cc\n']


def test_diff_identical_text_is_unchanged():
    text = 'one\ntwo\nthree\n'
    parts = diff(text, text)
    assert all(part.kind is DiffKind.UNCHANGED for part in parts)
    assert rebuild(parts, DiffKind.UNCHANGED) == text


def test_diff_from_empty():
    assert kinds(diff('', 'a\nb\n')) == [
        (DiffKind.ADDED, 'a\n'),
        (DiffKind.ADDED, 'b\n'),
    ]


def test_diff_to_empty():
    assert kinds(diff('a\nb\n', '')) == [
        (DiffKind.REMOVED, 'a\n'),
        (DiffKind.REMOVED, 'b\n'),
    ]


def test_diff_both_empty():
    assert diff('', '') == []


def test_diff_replacement_removes_before_adding():
    assert kinds(diff('v1\n', 'v2\n')) == [
        (DiffKind.REMOVED, 'v1\n'),
        (DiffKind.ADDED, 'v2\n'),
    ]


def test_diff_keeps_common_prefix_and_suffix():
    old = 'head\nold\ntail\n'
    new = 'head\nnew\ntail\n'
    assert kinds(diff(old, new)) == [
        (DiffKind.UNCHANGED, 'head\n'),
        (DiffKind.REMOVED, 'old\n'),
        (DiffKind.ADDED, 'new\n'),
        (DiffKind.UNCHANGED, 'tail\n'),
    ]


def test_diff_insertion_in_middle():
    assert kinds(diff('a\nc\n', 'a\nb\nc\n')) == [
        (DiffKind.UNCHANGED, 'a\n'),
        (DiffKind.ADDED, 'b\n'),
        (DiffKind.UNCHANGED, 'c\n'),
    ]


def test_diff_missing_final_newline_is_a_change():
    assert kinds(diff('a\n', 'a')) == [
        (DiffKind.REMOVED, 'a\n'),
        (DiffKind.ADDED, 'a'),
    ]


@pytest.mark.parametrize('old,new', [
    ('a\nb\nc\n', 'a\nc\nd\n'),
    ('x\n' * 5, 'x\n' * 3 + 'y\n'),
    ('first\nsecond', 'zeroth\nfirst\nsecond\nthird\n'),
])
def test_diff_reconstructs_both_sides(old, new):
    parts = diff(old, new)
    assert rebuild(parts, DiffKind.UNCHANGED, DiffKind.ADDED) == new
    assert rebuild(parts, DiffKind.UNCHANGED, DiffKind.REMOVED) == old


def lcs_length(a, b):
    table = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i, x in enumerate(a):
        for j, y in enumerate(b):
            table[i + 1][j + 1] = table[i][j] + 1 if x == y else max(table[i][j + 1], table[i + 1][j])
    return table[-1][-1]


def edit_count(parts):
    return sum(1 for part in parts if part.kind is not DiffKind.UNCHANGED)


def test_diff_prefers_shortest_edit_script():
    assert kinds(diff('c\na\nc\n', 'a\nb\nc\n')) == [
        (DiffKind.REMOVED, 'c\n'),
        (DiffKind.UNCHANGED, 'a\n'),
        (DiffKind.ADDED, 'b\n'),
        (DiffKind.UNCHANGED, 'c\n'),
    ]


def test_diff_edit_count_matches_longest_common_subsequence():
    texts = [''.join(f'{c}\n' for c in combo)
             for size in range(5) for combo in product('abc', repeat=size)]
    for old in texts:
        for new in texts:
            parts = diff(old, new)
            old_lines, new_lines = split_lines(old), split_lines(new)
            expected = len(old_lines) + len(new_lines) - 2 * lcs_length(old_lines, new_lines)
            assert edit_count(parts) == expected, (old, new)
            assert rebuild(parts, DiffKind.UNCHANGED, DiffKind.ADDED) == new
            assert rebuild(parts, DiffKind.UNCHANGED, DiffKind.REMOVED) == old


def test_diff_changed_runs_remove_before_adding():
    parts = diff('a\nx\ny\nb\n', 'a\np\nb\nq\n')
    assert kinds(parts) == [
        (DiffKind.UNCHANGED, 'a\n'),
        (DiffKind.REMOVED, 'x\n'),
        (DiffKind.REMOVED, 'y\n'),
        (DiffKind.ADDED, 'p\n'),
        (DiffKind.UNCHANGED, 'b\n'),
        (DiffKind.ADDED, 'q\n'),
    ]


def test_stats():
    parts = diff('a\nb\nc\n', 'a\nB\nc\nd\n')
    assert stats(parts) == (2, 1)


def test_diff_part_flags():
    assert DiffPart(DiffKind.ADDED, 'x').added
    assert DiffPart(DiffKind.REMOVED, 'x').removed
    assert not DiffPart(DiffKind.UNCHANGED, 'x').added


def test_show_commit_root(repo, write_file):
    write_file(repo, 'f.txt', 'hello\n')
    repo.add('f.txt')
    digest = repo.commit('first')

    result = repo.diff.show_commit(digest)

    assert result.digest == digest
    assert result.parent is None
    [change] = result.changes
    assert change.status is ChangeStatus.ROOT
    assert change.content == 'hello\n'
    assert change.parts == []
    assert change.is_new


def test_show_commit_modified(repo_with_commits):
    repo = repo_with_commits
    [change] = repo.diff.show_commit(repo.second).changes

    assert change.status is ChangeStatus.MODIFIED
    assert change.parent_content == 'v1\n'
    assert kinds(change.parts) == [(DiffKind.REMOVED, 'v1\n'), (DiffKind.ADDED, 'v2\n')]


def test_show_commit_new_file(repo_with_commits, write_file):
    repo = repo_with_commits
    write_file(repo, 'other.txt', 'brand new\n')
    repo.add('other.txt')
    digest = repo.commit('third')

    [change] = repo.diff.show_commit(digest).changes
    assert change.status is ChangeStatus.NEW
    assert change.parent_content is None


def test_show_commit_unchanged_file(repo_with_commits):
    repo = repo_with_commits
    repo.add('notes.txt')
    digest = repo.commit('same content again')

    [change] = repo.diff.show_commit(digest).changes
    assert change.status is ChangeStatus.MODIFIED
    assert change.is_unchanged


def test_show_commit_uses_last_parent_entry(repo, write_file):
    write_file(repo, 'f.txt', 'one\n')
    repo.add('f.txt')
    write_file(repo, 'f.txt', 'two\n')
    repo.add('f.txt')
    repo.commit('twice')

    write_file(repo, 'f.txt', 'three\n')
    repo.add('f.txt')
    digest = repo.commit('third')

    [change] = repo.diff.show_commit(digest).changes
    assert change.parent_content == 'two\n'


def test_show_commit_missing_parent_degrades(repo_with_commits):
    repo = repo_with_commits
    repo.store.object_path(repo.first).unlink()

    [change] = repo.diff.show_commit(repo.second).changes
    assert change.status is ChangeStatus.MISSING
    assert change.content == 'v2\n'


def test_show_commit_missing_blob_degrades(repo_with_commits):
    repo = repo_with_commits
    commit = repo.store.read_commit(repo.second)
    repo.store.object_path(commit.files[0].digest).unlink()

    [change] = repo.diff.show_commit(repo.second).changes
    assert change.status is ChangeStatus.MISSING
    assert change.content is None


def test_format_commit_diff_plain(repo_with_commits):
    repo = repo_with_commits
    text = repo.diff.format_commit_diff(repo.diff.show_commit(repo.second), color=False)

    lines = text.split('\n')
    assert lines[0] == f'commit {repo.second}'
    assert f'Parent: {repo.first}' in lines
    assert '    second' in lines
    assert 'Changes in file: notes.txt' in lines
    assert lines[-2:] == ['--v1', '++v2']
    assert '\x1b[' not in text


def test_format_commit_diff_root_and_color(repo_with_commits):
    repo = repo_with_commits
    text = repo.diff.format_commit_diff(repo.diff.show_commit(repo.first), color=True)
    assert 'First commit. No parent commit.' in text
    assert '\x1b[' in text


def test_diff_engine_diff_delegates(repo):
    assert DiffEngine(repo.store).diff('a\n', 'a\n') == [DiffPart(DiffKind.UNCHANGED, 'a\n')]
