"""CLI output utilities and formatting."""

import logging

import click
from colorama import Fore, Style

BANNER = f"""
{Fore.YELLOW}╔════════════════════════════════════════════════╗{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.CYAN}{Style.BRIGHT}DevDiary{Style.RESET_ALL}                                     {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.WHITE}A tiny local version-control core{Style.RESET_ALL}            {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}╚════════════════════════════════════════════════╝{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


class ClickHandler(logging.Handler):
    """Logging handler that prints records with the CLI message formatters."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                click.echo(error(message), err=True)
            elif record.levelno >= logging.WARNING:
                click.echo(warning(message), err=True)
            else:
                click.echo(info(message), err=True)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False) -> None:
    """
    Route devdiary log records to the terminal.

    Args:
        verbose: Show debug records instead of warnings only
    """
    logger = logging.getLogger('devdiary')
    for handler in list(logger.handlers):
        if isinstance(handler, ClickHandler):
            logger.removeHandler(handler)

    handler = ClickHandler()
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def require_repository():
    """Find the enclosing repository or abort with a message."""
    from devdiary.core.errors import NotARepositoryError
    from devdiary.core.repository import Repository

    try:
        return Repository.discover()
    except NotARepositoryError:
        click.echo(error("Not a devdiary repository (run 'devdiary init' first)"))
        raise click.Abort()
