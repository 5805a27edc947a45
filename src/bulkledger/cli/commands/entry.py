"""Bulk-entry commands: preview, post and import."""

import click
from bulkledger.domain.bulk_entry import BulkEntryService, format_parse_error
from bulkledger.domain.entries import ParseError, ParsedEntry, SaleEntry
from bulkledger.domain.errors import DomainError
from bulkledger.domain.party import PartyService
from bulkledger.cli.error_handling import handle_domain_error, parse_date_or_exit
from bulkledger.cli.party_resolution import resolve_party_or_exit

DATE_HELP = "Default date for lines without an inline date (YYYY-MM-DD, 'today', 'yesterday')"


def describe_entry(entry: ParsedEntry) -> str:
    """One-line summary of a parsed entry for previews."""
    parts = [f"{entry.kind.value:<8}", entry.date.isoformat(), f"{entry.amount:>12,.2f}"]
    if isinstance(entry, SaleEntry):
        parts.append(entry.payment_mode.value)
    if entry.party_name:
        parts.append(f"party={entry.party_name}")
    if entry.staff_name:
        parts.append(f"staff={entry.staff_name}")
    category = getattr(entry, "category", None)
    if category is not None:
        parts.append(f"category={category.value}")
    if entry.bill_number:
        parts.append(f"bill={entry.bill_number}")
    if entry.description:
        parts.append(f"note={entry.description}")
    if entry.has_gst:
        parts.append("GST")
    return "  ".join(parts)


def _show_results(results: list) -> None:
    for line_no, result in enumerate(results, start=1):
        if isinstance(result, ParseError):
            click.echo(f"{line_no:>3}  ERROR     {format_parse_error(result)}")
        else:
            click.echo(f"{line_no:>3}  {describe_entry(result)}")


def _resolve_party_hint(ctx: click.Context, db, party: str | None) -> int | None:
    if party is None:
        return None
    return resolve_party_or_exit(ctx, PartyService(db), party).id


@click.command("preview")
@click.argument("entries_file", type=click.File("r", encoding="utf-8"))
@click.option("--date", "default_date", help=DATE_HELP)
@click.option("--party", help="Post bills and payments without a party name against this party")
@click.pass_context
def preview_entries(ctx, entries_file, default_date: str | None, party: str | None):
    """Parse ENTRIES_FILE and show what would be posted (use - for stdin)."""
    db = ctx.obj["db"]
    entry_date = parse_date_or_exit(ctx, default_date)
    party_id = _resolve_party_hint(ctx, db, party)
    service = BulkEntryService(db)

    checked = service.preview(entries_file.read(), entry_date, party_id_hint=party_id)
    if not checked["results"]:
        click.echo("No entries found.")
        return

    _show_results(checked["results"])
    click.echo(
        f"\n{len(checked['entries'])} entries, {len(checked['parse_errors'])} unreadable lines"
    )
    for error in checked["validation_errors"]:
        click.echo(f"Invalid: {error}", err=True)
    for warning in checked["duplicates"]:
        click.echo(f"Duplicate: {warning.message}")


@click.command("post")
@click.argument("entries_file", type=click.File("r", encoding="utf-8"))
@click.option("--date", "default_date", help=DATE_HELP)
@click.option("--party", help="Post bills and payments without a party name against this party")
@click.option("--process-anyway", is_flag=True, help="Post entries even if they look like duplicates")
@click.pass_context
def post_entries(ctx, entries_file, default_date: str | None, party: str | None, process_anyway: bool):
    """Post the entries in ENTRIES_FILE (use - for stdin).

    Lines that cannot be read are reported and left out. If any entry looks
    like a re-submission of a recent transaction nothing is posted unless
    --process-anyway is given.

    Examples:
        bulkledger post day.txt --date 2025-01-20
        bulkledger post day.txt --process-anyway
    """
    db = ctx.obj["db"]
    entry_date = parse_date_or_exit(ctx, default_date)
    party_id = _resolve_party_hint(ctx, db, party)
    service = BulkEntryService(db)

    result = service.submit(
        entries_file.read(), entry_date, process_anyway=process_anyway, party_id_hint=party_id
    )

    for error in result["parse_errors"]:
        click.echo(f"Skipped line {format_parse_error(error)}", err=True)
    for warning in result["duplicates"]:
        click.echo(f"Duplicate: {warning.message}", err=True)

    if not result["success"]:
        click.echo(f"Error: {result['error']}", err=True)
        ctx.exit(1)

    click.echo(f"Posted {len(result['posted'])} entries")


@click.command("import")
@click.argument("entries_file", type=click.File("r", encoding="utf-8"))
@click.option("--date", "default_date", help=DATE_HELP)
@click.option("--party", help="Post bills and payments without a party name against this party")
@click.pass_context
def import_entries(ctx, entries_file, default_date: str | None, party: str | None):
    """Import ENTRIES_FILE unattended; duplicates are skipped (use - for stdin)."""
    db = ctx.obj["db"]
    entry_date = parse_date_or_exit(ctx, default_date)
    party_id = _resolve_party_hint(ctx, db, party)
    service = BulkEntryService(db)

    try:
        result = service.import_entries(entries_file.read(), entry_date, party_id_hint=party_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} transactions")
    click.echo(f"  Skipped: {result['skipped']} duplicates")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register bulk-entry commands with main CLI."""
    cli.add_command(preview_entries)
    cli.add_command(post_entries)
    cli.add_command(import_entries)
