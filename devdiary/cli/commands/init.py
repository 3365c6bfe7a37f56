"""Initialize a new DevDiary repository."""

import click
from pathlib import Path
from devdiary.core.repository import Repository
from devdiary.core.errors import AlreadyInitializedError
from devdiary.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new DevDiary repository.

    Creates a .devdiary directory with the object store, HEAD and the
    staging index. Running it again is safe: existing history and staged
    files are left untouched.

    Examples:
        devdiary init                # Initialize in current directory
        devdiary init my-project     # Initialize in my-project directory
    """
    try:
        repo_path = Path(path).resolve()

        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = Repository(str(repo_path))
        repo.init()

        click.echo(success(f"Initialized empty DevDiary repository in {repo.diary_dir}"))
        click.echo(info("  .devdiary/objects/  - Object database"))
        click.echo(info("  .devdiary/HEAD      - Latest commit pointer"))
        click.echo(info("  .devdiary/index     - Staging area"))
        click.echo(info("You can now start tracking files with:"))
        click.echo(info("  devdiary add <file>"))
        click.echo(info("  devdiary commit -m 'message'"))

    except AlreadyInitializedError as e:
        click.echo(info(str(e)))
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()
    except OSError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()
