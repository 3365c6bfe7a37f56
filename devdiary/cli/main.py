"""Main CLI entry point for DevDiary."""

import click
from colorama import init

from devdiary import __version__
from devdiary.core.errors import DiaryError
from devdiary.cli.output import BANNER, error, setup_logging
from devdiary.cli.commands import (init_cmd, add_cmd, commit_cmd, log_cmd,
                                   show_cmd, status_cmd, config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class DiaryGroup(click.Group):
    """Command group that shows the banner in help and reports DevDiary errors."""

    def format_help(self, ctx, formatter):
        click.echo(BANNER)
        super().format_help(ctx, formatter)

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except DiaryError as e:
            # Corrupt index or object files end here
            click.echo(error(str(e)))
            raise click.Abort()


@click.group(cls=DiaryGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Show debug output')
def cli(verbose):
    """DevDiary - record snapshots of your files and browse their history."""
    setup_logging(verbose)


cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(status_cmd)
cli.add_command(log_cmd)
cli.add_command(show_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
