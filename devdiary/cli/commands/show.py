"""Show command - display commit details with diff."""

import click
from colorama import Fore, Style
from devdiary.operations.diff import ChangeStatus, stats
from devdiary.cli.output import error, info, require_repository


def echo_stat(commit_diff, use_color):
    """Print a per-file summary of added and removed lines."""
    total_additions = 0
    total_deletions = 0

    click.echo("Files changed:")
    for change in commit_diff.changes:
        additions, deletions = stats(change.parts)
        if change.is_new and change.content:
            additions = len(change.content.splitlines())
        total_additions += additions
        total_deletions += deletions

        status = change.status.value
        if use_color:
            changes = f"{Fore.GREEN}+{additions}{Style.RESET_ALL} {Fore.RED}-{deletions}{Style.RESET_ALL}"
        else:
            changes = f"+{additions} -{deletions}"
        click.echo(f"  {change.path:<40} {status:<10} {changes}")

    click.echo()
    click.echo(f"{len(commit_diff.changes)} file(s) changed, "
               f"{total_additions} insertions(+), {total_deletions} deletions(-)")


@click.command('show')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--stat', is_flag=True, help='Show diffstat (summary of changes)')
@click.argument('commit', required=False, default='HEAD')
def show_cmd(no_color, stat, commit):
    """
    Show commit details with diff.

    Displays the commit message and, for every file it records, the
    line changes against the same file in the parent commit.

    Examples:
        devdiary show                # Show HEAD commit with diff
        devdiary show abc1234        # Show specific commit (prefix allowed)
        devdiary show --stat         # Show with change summary
    """
    repo = require_repository()
    use_color = not no_color and repo.config.color

    if commit == 'HEAD' and repo.head() is None:
        click.echo(info("No commits yet"))
        return

    commit_diff = repo.show(commit)
    if commit_diff is None:
        click.echo(error(f"Commit not found: {commit}"))
        return

    if stat:
        click.echo(f"commit {commit_diff.digest}")
        click.echo()
        echo_stat(commit_diff, use_color)
        return

    click.echo(repo.diff.format_commit_diff(commit_diff, color=use_color))

    missing = [c.path for c in commit_diff.changes if c.status is ChangeStatus.MISSING]
    if missing:
        click.echo()
        click.echo(error(f"Could not compare {len(missing)} file(s): {', '.join(missing)}"))
