"""Log command - show commit history."""

import click
from itertools import islice
from colorama import Fore, Style
from devdiary.cli.output import warning, require_repository


def display_entry_full(entry, color=True):
    """Display a commit with its full header and indented message."""
    header = f"commit {entry.digest}"
    click.echo(f"{Fore.YELLOW}{header}{Style.RESET_ALL}" if color else header)
    click.echo(f"Author Date: {entry.timestamp}")
    click.echo()
    for line in entry.message.split('\n'):
        click.echo(f"\t{line}")
    click.echo()


def display_entry_oneline(entry, color=True):
    """Display a commit on a single line."""
    message = entry.message.split('\n')[0]
    if len(message) > 60:
        message = message[:57] + "..."
    short = f"{Fore.YELLOW}{entry.short_hash}{Style.RESET_ALL}" if color else entry.short_hash
    click.echo(f"{short} {message}")


@click.command('log')
@click.option('-n', '--max-count', type=int, help='Limit number of commits to show')
@click.option('--oneline', is_flag=True, help='Show commits in one-line format')
@click.option('--no-color', is_flag=True, help='Disable colored output')
def log_cmd(max_count, oneline, no_color):
    """
    Show commit logs.

    Walks history from HEAD back to the first commit.

    Examples:
        devdiary log              # Show all commits from HEAD
        devdiary log -n 5         # Show last 5 commits
        devdiary log --oneline    # Compact format
    """
    repo = require_repository()
    use_color = not no_color and repo.config.color

    if repo.head() is None:
        click.echo(warning("No commits yet"))
        return

    entries = repo.log()
    if max_count is not None:
        entries = islice(entries, max(max_count, 0))

    for entry in entries:
        if oneline:
            display_entry_oneline(entry, use_color)
        else:
            display_entry_full(entry, use_color)
