"""CLI helpers for party resolution and error handling."""

from __future__ import annotations

import click
from bulkledger.domain.entities import Party
from bulkledger.domain.errors import NotFoundError
from bulkledger.domain.party import PartyService


def resolve_party(party_service: PartyService, party: str | int) -> Party:
    """Resolve a party name or ID to a party.

    Names win over IDs, so a party literally named "12" is still found by
    name. Names are matched ignoring case.

    Raises:
        NotFoundError: If no party matches
    """
    if isinstance(party, int):
        return party_service.require_party(party)

    try:
        return party_service.require_party(party)
    except NotFoundError:
        if not party.strip().isdigit():
            raise
    return party_service.require_party(int(party))


def resolve_party_or_exit(
    ctx: click.Context, party_service: PartyService, party: str | int
) -> Party:
    """Resolve party name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_party(party_service, party)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
