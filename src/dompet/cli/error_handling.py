"""CLI error handling helpers.

Every failing command ends the same way: one ``Error:`` line on stderr, a
debug log record for ``--log-level debug`` runs, and exit status 1.
"""

import click

from dompet.domain.errors import DomainError, ExtractionError, NotFoundError
from dompet.logging_setup import get_logger

_logger = get_logger("dompet.cli")

# Follow-up hints printed after the error line, most specific class first.
_HINTS: tuple[tuple[type[Exception], str], ...] = (
    (ExtractionError, "Tip: please enter the transaction manually with 'dompet add'."),
    (NotFoundError, "Tip: use the matching 'list' command to see existing IDs."),
)


def fail(ctx: click.Context, message: str) -> None:
    """Print an error message and exit with failure."""
    _logger.debug("cli:error command=%s message=%s", ctx.info_name, message)
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def hint_for(error: Exception) -> str | None:
    """Return the follow-up hint for an error, if there is one."""
    for error_type, hint in _HINTS:
        if isinstance(error, error_type):
            return hint
    return None


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error, with its hint, and exit with failure."""
    _logger.debug("cli:error command=%s type=%s", ctx.info_name, type(error).__name__)
    click.echo(f"Error: {error}", err=True)
    hint = hint_for(error)
    if hint is not None:
        click.echo(hint, err=True)
    ctx.exit(1)
