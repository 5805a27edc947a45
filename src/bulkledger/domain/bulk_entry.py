"""Bulk-entry pipeline service.

Runs operator text through parse, validate, duplicate check and apply.
Three entry points share that pipeline:

- preview() has no side effects and backs a live preview.
- submit() is the interactive path. Duplicate warnings block the post
  until the operator chooses to process anyway.
- import_entries() is the unattended path. Duplicates are skipped and
  logged.
"""

import logging
from datetime import date
from typing import Any, Optional

from bulkledger.database.base import Database
from bulkledger.domain.apply import BulkApplyService
from bulkledger.domain.duplicates import DuplicateDetector
from bulkledger.domain.entries import ParsedEntry, ParseError
from bulkledger.domain.errors import BatchValidationError, DomainError
from bulkledger.domain.parser import parse_entries
from bulkledger.domain.validator import validate_entries

logger = logging.getLogger(__name__)

NO_VALID_ENTRIES = "No valid entries to process."


def _split(results: list) -> tuple[list[ParsedEntry], list[ParseError]]:
    entries = [r for r in results if not isinstance(r, ParseError)]
    errors = [r for r in results if isinstance(r, ParseError)]
    return entries, errors


def format_parse_error(error: ParseError) -> str:
    """Render a parse error for display."""
    return f"{error.raw_line!r}: {error.reason}"


class BulkEntryService:
    """Service for turning bulk text into posted transactions."""

    def __init__(self, db: Database, detector: Optional[DuplicateDetector] = None):
        """Initialize bulk entry service.

        Args:
            db: Database instance
            detector: Duplicate detector shared by the check and apply steps
        """
        self.db = db
        self.detector = detector or DuplicateDetector(db)
        self.apply_service = BulkApplyService(db, detector=self.detector)

    def preview(
        self, text: str, default_date: date, party_id_hint: Optional[int] = None
    ) -> dict[str, Any]:
        """Parse and check a batch without posting it.

        Returns:
            Dict with:
            - results: entries and ParseErrors in input order
            - entries: the parsed entries only
            - parse_errors: the ParseErrors only
            - validation_errors: validator messages for the entries
            - duplicates: DuplicateWarnings (only checked when valid)
        """
        results = parse_entries(text, default_date)
        entries, parse_errors = _split(results)
        validation_errors = validate_entries(entries, require_party=party_id_hint is None)
        duplicates = []
        if entries and not validation_errors:
            duplicates = self.detector.find_duplicates(entries, party_id_hint)
        return {
            "results": results,
            "entries": entries,
            "parse_errors": parse_errors,
            "validation_errors": validation_errors,
            "duplicates": duplicates,
        }

    def submit(
        self,
        text: str,
        default_date: date,
        process_anyway: bool = False,
        party_id_hint: Optional[int] = None,
    ) -> dict[str, Any]:
        """Interactive submission of a batch.

        Lines that fail to parse are reported and left out; the remaining
        entries are posted together or not at all.

        Args:
            text: Operator input
            default_date: Date for lines without an inline date
            process_anyway: Post entries even if they look like duplicates
            party_id_hint: Party for bills and payments that name no party

        Returns:
            Dict with success, error (message or None), posted, skipped,
            duplicates, parse_errors and validation_errors
        """
        checked = self.preview(text, default_date, party_id_hint)
        result: dict[str, Any] = {
            "success": False,
            "error": None,
            "posted": [],
            "skipped": 0,
            "duplicates": checked["duplicates"],
            "parse_errors": checked["parse_errors"],
            "validation_errors": checked["validation_errors"],
        }

        if not checked["entries"]:
            result["error"] = NO_VALID_ENTRIES
            return result

        if checked["validation_errors"]:
            result["error"] = "; ".join(checked["validation_errors"])
            return result

        if checked["duplicates"] and not process_anyway:
            count = len(checked["duplicates"])
            result["error"] = (
                f"{count} duplicate entr{'ies' if count != 1 else 'y'} detected; "
                "process anyway or remove them"
            )
            return result

        # Duplicates were reported above; every entry is posted.
        overrides = range(len(checked["entries"]))
        try:
            applied = self.apply_service.apply(
                checked["entries"], party_id_hint=party_id_hint, overrides=overrides
            )
        except DomainError as e:
            result["error"] = f"Failed to process entries: {e}"
            return result

        result["success"] = True
        result["posted"] = applied["posted"]
        result["skipped"] = applied["skipped"]
        return result

    def import_entries(
        self, text: str, default_date: date, party_id_hint: Optional[int] = None
    ) -> dict[str, Any]:
        """Unattended import of a batch; duplicates are skipped silently.

        Returns:
            Dict with import statistics:
            - imported: number of transactions posted
            - skipped: number of entries skipped as duplicates
            - errors: rendered parse errors, in input order

        Raises:
            BatchValidationError: If the parsed entries fail validation
            StoreError: If the store fails; nothing is persisted
        """
        results = parse_entries(text, default_date)
        entries, parse_errors = _split(results)
        errors = [format_parse_error(e) for e in parse_errors]

        if not entries:
            return {"imported": 0, "skipped": 0, "errors": errors}

        validation_errors = validate_entries(entries, require_party=party_id_hint is None)
        if validation_errors:
            raise BatchValidationError(validation_errors)

        applied = self.apply_service.apply(entries, party_id_hint=party_id_hint)
        return {
            "imported": len(applied["posted"]),
            "skipped": applied["skipped"],
            "errors": errors,
        }
