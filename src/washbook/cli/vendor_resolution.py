"""CLI helpers for vendor resolution and error handling."""

from __future__ import annotations

import logging

import click
from washbook.domain.vendor import VendorService
from washbook.utils.vendor_resolver import resolve_vendor

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: ValueError) -> None:
    """Print a domain error as ``Error: <message>`` on stderr and exit 1."""
    logger.debug("Command %s failed: %r", ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def resolve_vendor_or_exit(
    ctx: click.Context, vendor_service: VendorService, vendor: str | int
) -> int:
    """Resolve vendor business name or ID, or exit with a CLI error."""
    try:
        return resolve_vendor(vendor_service, vendor)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
