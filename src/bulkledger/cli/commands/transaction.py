"""Transaction management commands."""

import click
from bulkledger.domain.errors import DomainError
from bulkledger.domain.party import PartyService
from bulkledger.cli.error_handling import handle_domain_error
from bulkledger.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage posted transactions."""
    pass


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int) -> None:
    """Delete a transaction and repair its party's balances."""
    db = ctx.obj["db"]
    service = PartyService(db)

    try:
        balance = service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")
    if balance is not None:
        click.echo(f"  Party balance: {balance:,.2f}")


@transaction_group.command("redate")
@click.argument("transaction_id", type=int)
@click.argument("new_date")
@click.pass_context
def redate_transaction(ctx, transaction_id: int, new_date: str) -> None:
    """Move a transaction to NEW_DATE and repair its party's balances.

    Examples:
        bulkledger transaction redate 12 2025-01-18
    """
    db = ctx.obj["db"]
    service = PartyService(db)

    try:
        txn_date = parse_date(new_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn = service.redate_transaction(transaction_id, txn_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Moved transaction {transaction_id} to {txn.date.isoformat()}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
