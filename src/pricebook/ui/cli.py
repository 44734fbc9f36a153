from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from pricebook.app import (
    commit_invoice,
    get_price_history,
    import_extracted_invoice,
    scan_for_cost_anomalies,
)
from pricebook.config import configure_logging, get_pricing_config
from pricebook.domain.anomalies import ScanMode
from pricebook.domain.errors import PricebookError
from pricebook.domain.pricing import calculate_pricing, detect_pack_size, validate_pricing

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

MAX_REPORTED_FINDINGS = 100


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Invoice pricing and catalog reconciliation")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    commit = subparsers.add_parser("commit", help="Post a parsed invoice into the catalog")
    commit.add_argument("invoice_id", type=str, help="Id of the invoice to commit")

    scan = subparsers.add_parser("scan", help="Flag catalog costs that look like case prices")
    scan.add_argument(
        "--apply",
        action="store_true",
        help="Zero cost and markup of flagged items (default is a dry run)",
    )

    price = subparsers.add_parser("price", help="Calculate sell prices for a cost")
    price.add_argument("cost", type=str, help="Cost ex tax as printed on the invoice")
    price.add_argument("--markup", type=str, help="Markup multiplier (defaults to category)")
    price.add_argument("--category", type=str, help="Category used to resolve the markup")
    price.add_argument(
        "--pack-size",
        type=int,
        help="Units per invoiced line (detected from --name when omitted)",
    )
    price.add_argument("--name", type=str, help="Product name used for pack-size detection")
    price.add_argument("--tax-rate", type=str, help="Tax rate (defaults to config)")

    import_ = subparsers.add_parser("import", help="Record an extracted invoice as parsed")
    import_.add_argument("payload", type=Path, help="Path to the extraction JSON payload")
    import_.add_argument(
        "--document",
        type=Path,
        help="Source document (e.g. PDF) stored with the invoice",
    )

    history = subparsers.add_parser("history", help="Show recent price changes of an item")
    history.add_argument("item_id", type=str, help="Id of the catalog item")
    history.add_argument(
        "--limit", type=int, default=10, help="Entries to show (default: %(default)s)"
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _parse_decimal(value: str, name: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid {name}: {value}") from exc


def _run_price(args: argparse.Namespace) -> None:
    pricing = get_pricing_config()
    markup = pricing.markup_resolver().resolve(
        args.category,
        _parse_decimal(args.markup, "markup") if args.markup else None,
    )
    if args.pack_size is not None:
        pack_size = args.pack_size
    elif args.name:
        pack_size = detect_pack_size(args.name)
    else:
        pack_size = 1
    tax_rate = _parse_decimal(args.tax_rate, "tax rate") if args.tax_rate else pricing.tax_rate

    calculation = calculate_pricing(
        _parse_decimal(args.cost, "cost"), markup, pack_size, tax_rate
    )
    log.info(
        "cost=%s markup=%s pack_size=%s effective_cost=%s sell_ex_tax=%s tax=%s sell_inc_tax=%s",
        calculation.cost_ex_tax,
        calculation.markup,
        pack_size,
        calculation.effective_cost_ex_tax,
        calculation.sell_ex_tax,
        calculation.tax_amount,
        calculation.sell_inc_tax,
    )
    for problem in validate_pricing(calculation):
        log.warning("Pricing check: %s", problem)


def _run_scan(args: argparse.Namespace) -> None:
    mode = ScanMode.APPLY if args.apply else ScanMode.DRY_RUN
    result = scan_for_cost_anomalies(mode=mode)
    for finding in result.flagged_items[:MAX_REPORTED_FINDINGS]:
        log.info(
            "%s  %-40s cost=%s sell_ex=%s sell_inc=%s  %s",
            finding.item_id,
            finding.name,
            finding.cost_ex_tax,
            finding.sell_ex_tax,
            finding.sell_inc_tax,
            finding.reason,
        )
    if mode is ScanMode.DRY_RUN:
        log.info(
            "Found %d suspicious costs among %d items. Re-run with --apply to reset them.",
            len(result.flagged_items),
            result.total_items,
        )
    else:
        log.info("Reset %d items to zero cost", result.fixed_count)


def _run_import(args: argparse.Namespace) -> None:
    payload = args.payload.read_bytes()
    document = args.document.read_bytes() if args.document else None
    invoice = import_extracted_invoice(payload, raw_document=document)
    log.info(
        "Imported invoice %s with %d lines: subtotal=%s tax=%s total=%s",
        invoice.id,
        len(invoice.line_items),
        invoice.subtotal_ex_tax,
        invoice.tax_amount,
        invoice.total_inc_tax,
    )


def _run_history(args: argparse.Namespace) -> None:
    entries = get_price_history(_parse_uuid(args.item_id), limit=args.limit)
    if not entries:
        log.info("No price history for item %s", args.item_id)
    for entry in entries:
        log.info(
            "%s  cost=%s markup=%s sell_ex=%s sell_inc=%s invoice=%s",
            entry.changed_at.isoformat(timespec="seconds"),
            entry.cost_ex_tax,
            entry.markup,
            entry.sell_ex_tax,
            entry.sell_inc_tax,
            entry.source_invoice_id,
        )


def _run_commit(args: argparse.Namespace) -> None:
    result = commit_invoice(_parse_uuid(args.invoice_id))
    log.info(
        "Committed invoice %s: items created=%s, updated=%s, price changes=%s",
        result.invoice.id,
        result.items_created,
        result.items_updated,
        result.price_changes,
    )


_COMMANDS = {
    "commit": _run_commit,
    "scan": _run_scan,
    "price": _run_price,
    "import": _run_import,
    "history": _run_history,
}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _COMMANDS[parsed_args.command](parsed_args)
    except PricebookError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
