"""Commit command - create a commit from staged changes."""

import click
from devdiary.core.errors import NothingToCommitError
from devdiary.cli.output import success, error, info, warning, require_repository


@click.command('commit')
@click.option('-m', '--message', 'message_opt', help='Commit message')
@click.option('--allow-empty/--no-allow-empty', default=True,
              help='Allow a commit when nothing is staged (default: allow)')
@click.argument('message', required=False)
def commit_cmd(message_opt, allow_empty, message):
    """
    Record staged changes to the repository.

    Creates a commit from the files in the staging area. The new commit's
    parent is the current HEAD; HEAD then moves to the new commit and the
    staging area is emptied.

    Examples:
        devdiary commit -m "Initial commit"
        devdiary commit "Fix typo"
    """
    message = message_opt or message
    if not message:
        click.echo(error("Commit message required. Use -m \"message\""))
        raise click.Abort()

    repo = require_repository()

    staged = repo.status()
    parent = repo.head()

    try:
        commit_hash = repo.commit(message, allow_empty=allow_empty)
    except NothingToCommitError as e:
        click.echo(error(str(e)))
        click.echo(info("Use 'devdiary add <file>' to stage changes"))
        raise click.Abort()

    click.echo(success(f"Commit created successfully. {commit_hash}"))
    click.echo(info(f"Message: {message}"))
    if parent:
        click.echo(info(f"Parent: {parent[:7]}"))
    else:
        click.echo(info("(root commit)"))
    if staged:
        click.echo(info(f"Files: {len(staged)}"))
    else:
        click.echo(warning("No files were staged"))
