"""Config command - read and change settings."""

import click
from devdiary.core.config import Config, split_key
from devdiary.core.repository import Repository
from devdiary.cli.output import success, error, info, warning

global_option = click.option('--global', 'is_global', is_flag=True,
                             help='Use ~/.devdiaryconfig instead of the repository file')


def _config_for(is_global, writing=False):
    """Config scoped to the current repository, or user-only when is_global."""
    if is_global:
        return Config()
    repo = Repository.find_repository()
    if repo:
        return repo.config
    if writing:
        click.echo(error("Not a devdiary repository (use --global for global config)"))
        raise click.Abort()
    return Config()


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@global_option
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        devdiary config set color.ui false
        devdiary config set index.duplicates last
        devdiary config set --global color.ui false
    """
    config = _config_for(is_global, writing=True)
    section, option = split_key(key)
    config.set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('unset')
@click.argument('key')
@global_option
def config_unset(key, is_global):
    """Remove a config value."""
    config = _config_for(is_global, writing=True)
    section, option = split_key(key)

    if config.unset(section, option, global_config=is_global):
        click.echo(success(f"Removed {key}"))
    else:
        click.echo(warning(f"{key} was not set"))


@config_cmd.command('get')
@click.argument('key')
@global_option
def config_get(key, is_global):
    """
    Print the effective value of a key.

    Environment variables such as DEVDIARY_COLOR_UI take precedence.
    """
    section, option = split_key(key)
    value = _config_for(is_global).get(section, option)
    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('list')
@global_option
def config_list(is_global):
    """List values from the repository and user files."""
    values = _config_for(is_global).list_all(global_only=is_global)
    if not values:
        click.echo(info("No configuration set"))
        return

    for section, items in values.items():
        for key, value in items.items():
            click.echo(f"  {section}.{key}={value}")
