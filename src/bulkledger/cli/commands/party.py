"""Party management commands."""

import click
from decimal import Decimal
from bulkledger.domain.errors import DomainError
from bulkledger.domain.party import PartyService
from bulkledger.cli.error_handling import handle_domain_error, parse_date_or_exit
from bulkledger.cli.party_resolution import resolve_party_or_exit
from bulkledger.utils.amount_parser import parse_amount
from bulkledger.utils.gst import split_gst


@click.group()
def party_group():
    """Manage parties and their ledgers."""
    pass


@party_group.command("create")
@click.argument("name", metavar="PARTY_NAME")
@click.option("--credit-limit", default="0", help="Credit limit (default: no limit)")
@click.pass_context
def create_party(ctx, name: str, credit_limit: str):
    """Create a new party.

    Examples:
        bulkledger party create "PendalKarigar"
        bulkledger party create SAJ --credit-limit 200000
    """
    db = ctx.obj["db"]
    service = PartyService(db)

    try:
        limit = parse_amount(credit_limit)
        party = service.create_party(name=name, credit_limit=limit)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created party '{party.name}' (ID: {party.id})")


@party_group.command("list")
@click.pass_context
def list_parties(ctx):
    """List all parties with their balances."""
    db = ctx.obj["db"]
    service = PartyService(db)

    parties = service.list_parties()
    if not parties:
        click.echo("No parties found.")
        return

    click.echo("\nParties:")
    click.echo("-" * 60)
    for p in parties:
        click.echo(f"ID: {p.id:3d} | {p.name:20s} | Balance: {p.current_balance:>14,.2f}")


@party_group.command("show")
@click.argument("party", metavar="PARTY")
@click.option("--gst", "show_gst", is_flag=True, help="Split GST-inclusive amounts into base and GST")
@click.pass_context
def show_party(ctx, party: str, show_gst: bool):
    """Show a party's ledger with running balances.

    PARTY can be a party name or ID.
    """
    db = ctx.obj["db"]
    service = PartyService(db)
    found = resolve_party_or_exit(ctx, service, party)

    click.echo(f"\n{found.name} (ID: {found.id})")
    click.echo(f"Balance: {found.current_balance:,.2f}")
    used = service.credit_used_percent(found)
    if used is not None:
        click.echo(f"Credit limit: {found.credit_limit:,.2f} ({used}% used)")

    rows = service.statement(found.id)
    if not rows:
        click.echo("No transactions found.")
        return

    click.echo("-" * 100)
    click.echo(f"{'ID':>5}  {'Date':10}  {'Type':8}  {'Bill':10}  {'Amount':>14}  {'Balance':>14}  Note")
    for txn in rows:
        note = txn.description or ""
        if show_gst and txn.has_gst:
            base, gst = split_gst(txn.amount)
            note = f"{note} (base {base:,.2f} + GST {gst:,.2f})".strip()
        elif txn.has_gst:
            note = f"{note} GST".strip()
        balance = txn.running_balance if txn.running_balance is not None else Decimal("0")
        click.echo(
            f"{txn.id:>5}  {txn.date.isoformat():10}  {txn.type:8}  {txn.bill_number or '':10}  "
            f"{txn.amount:>14,.2f}  {balance:>14,.2f}  {note}"
        )


@party_group.command("add")
@click.argument("party", metavar="PARTY")
@click.argument("kind", type=click.Choice(["bill", "payment"]))
@click.argument("amount")
@click.option("--date", "txn_date", help="Transaction date (YYYY-MM-DD or 'today'), default today")
@click.option("--bill-number", help="Bill number (bills only)")
@click.option("--gst", "has_gst", is_flag=True, help="Amount includes GST")
@click.option("--description", help="Description")
@click.option("--force", is_flag=True, help="Post even if it looks like a duplicate")
@click.pass_context
def add_party_transaction(
    ctx,
    party: str,
    kind: str,
    amount: str,
    txn_date: str | None,
    bill_number: str | None,
    has_gst: bool,
    description: str | None,
    force: bool,
):
    """Add a single bill or payment for PARTY.

    Examples:
        bulkledger party add SAJ bill 33201 --bill-number SV2029 --gst
        bulkledger party add SAJ payment 20000 --date 2025-01-20
    """
    db = ctx.obj["db"]
    service = PartyService(db)
    found = resolve_party_or_exit(ctx, service, party)
    entry_date = parse_date_or_exit(ctx, txn_date)

    try:
        txn = service.add_transaction(
            party_id=found.id,
            kind=kind,
            txn_date=entry_date,
            amount=parse_amount(amount),
            bill_number=bill_number,
            has_gst=has_gst,
            description=description,
            force=force,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created {kind} {txn.id} for {found.name}")
    click.echo(f"  Running balance: {txn.running_balance:,.2f}")


@party_group.command("recalc")
@click.argument("party", metavar="PARTY", required=False)
@click.option("--all", "all_parties", is_flag=True, help="Recalculate every party")
@click.pass_context
def recalc_party(ctx, party: str | None, all_parties: bool):
    """Recalculate running balances for PARTY, or for every party with --all."""
    db = ctx.obj["db"]
    service = PartyService(db)

    if party is None and not all_parties:
        click.echo("Error: Give a PARTY or --all", err=True)
        ctx.exit(1)

    party_id = None
    if party is not None:
        party_id = resolve_party_or_exit(ctx, service, party).id

    try:
        balances = service.fix_balances(party_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    for pid, balance in balances.items():
        click.echo(f"Party {pid}: balance {balance:,.2f}")
    click.echo(f"Recalculated {len(balances)} part{'ies' if len(balances) != 1 else 'y'}")


def register_commands(cli):
    """Register party commands with main CLI."""
    cli.add_command(party_group, name="party")
