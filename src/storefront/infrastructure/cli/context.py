"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import click

from storefront.domain.model.requester import Requester


def current_requester() -> Requester:
    """Return the requester set on the root group, or fail with a usage error."""
    requester = click.get_current_context().find_root().obj
    if requester is None:
        raise click.UsageError("This command needs --user (or STOREFRONT_USER).")
    return requester
