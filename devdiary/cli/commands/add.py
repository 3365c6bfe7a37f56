"""Add command - stage files for commit."""

import click
from pathlib import Path
from devdiary.core.errors import SourceFileNotFoundError
from devdiary.cli.output import success, error, info, require_repository


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Stores each file's current content and stages it for the next
    commit. Modified files must be added again to stage the new content.
    Adding a file twice stages it twice.

    Examples:
        devdiary add notes.txt
        devdiary add a.txt b.txt
    """
    repo = require_repository()

    added = []
    failed = []

    for path_arg in paths:
        path = Path(path_arg)
        resolved_path = path if path.is_absolute() else Path.cwd() / path

        try:
            entry = repo.add(str(resolved_path))
            added.append(entry)
        except SourceFileNotFoundError:
            failed.append((path_arg, "File not found"))

    for entry in added:
        click.echo(info(f"{entry.digest}  {entry.path}"))
    if added:
        click.echo(success(f"Added {len(added)} file(s) to staging area"))

    if failed:
        for file, reason in failed:
            click.echo(error(f"{file}: {reason}"))
        raise click.Abort()
