"""CLI commands for DevDiary."""

from devdiary.cli.commands.init import init_cmd
from devdiary.cli.commands.add import add_cmd
from devdiary.cli.commands.commit import commit_cmd
from devdiary.cli.commands.status import status_cmd
from devdiary.cli.commands.log import log_cmd
from devdiary.cli.commands.show import show_cmd
from devdiary.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'status_cmd', 'log_cmd',
           'show_cmd', 'config_cmd']
