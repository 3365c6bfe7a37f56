"""Status command - list staged files."""

from collections import Counter

import click
from devdiary.cli.output import info, warning, require_repository


@click.command('status')
def status_cmd():
    """
    Show files staged for the next commit.

    Examples:
        devdiary status
    """
    repo = require_repository()

    head = repo.head()
    click.echo(f"HEAD: {head if head else '(no commits yet)'}")

    entries = repo.status()
    if not entries:
        click.echo(info("Nothing staged"))
        return

    click.echo("Changes to be committed:")
    for entry in entries:
        click.echo(f"  {entry.digest[:7]}  {entry.path}")

    repeated = [path for path, count in Counter(e.path for e in entries).items() if count > 1]
    if repeated:
        policy = repo.config.duplicate_policy
        click.echo()
        click.echo(warning(f"Staged more than once: {', '.join(repeated)}"))
        click.echo(info(f"index.duplicates = {policy}"))
