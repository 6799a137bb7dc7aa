"""
InvoiceFlow management CLI.

Usage:
    python manage.py init                  Bootstrap the store and show the profile
    python manage.py next-number           Show the number the next invoice gets
    python manage.py log [--limit N]       Show the action log, newest first
    python manage.py inventory [--search]  List inventory items
    python manage.py invoices [--search] [--status]
                                           List invoices, newest first
    python manage.py reset-log --yes       Clear the action log

Output is JSON on stdout; logs go to stderr.
"""

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from invoiceflow.application.services import InvoiceFlowServices, open_services
from invoiceflow.config import configure_logging, get_settings
from invoiceflow.core.entities.invoice import InvoiceStatus
from invoiceflow.core.exceptions import InvoiceFlowError


def _emit(value: Any) -> None:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True)
    elif isinstance(value, list):
        value = [
            v.model_dump(mode="json", by_alias=True) if isinstance(v, BaseModel) else v
            for v in value
        ]
    print(json.dumps(value, indent=2, ensure_ascii=False))


async def cmd_init(services: InvoiceFlowServices, args: argparse.Namespace) -> int:
    """Bootstrap already ran in open_services; show what is stored."""
    _emit(await services.organization.get())
    return 0


async def cmd_next_number(services: InvoiceFlowServices, args: argparse.Namespace) -> int:
    _emit(await services.invoices.get_next_invoice_number())
    return 0


async def cmd_log(services: InvoiceFlowServices, args: argparse.Namespace) -> int:
    entries = await services.action_logger.entries()
    _emit(entries[: args.limit] if args.limit else entries)
    return 0


async def cmd_inventory(services: InvoiceFlowServices, args: argparse.Namespace) -> int:
    _emit(await services.inventory.search(args.search or ""))
    return 0


async def cmd_invoices(services: InvoiceFlowServices, args: argparse.Namespace) -> int:
    status = InvoiceStatus(args.status) if args.status else None
    _emit(await services.invoices.search(args.search or "", status=status))
    return 0


async def cmd_reset_log(services: InvoiceFlowServices, args: argparse.Namespace) -> int:
    """Direct store reset; the only way entries ever leave the log early."""
    if not args.yes:
        print("Refusing to clear the action log without --yes.", file=sys.stderr)
        return 1
    cleared = await services.action_logger.clear()
    _emit({"cleared": cleared})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="InvoiceFlow management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override LOG_LEVEL for this run",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # init
    p_init = sub.add_parser("init", help="Bootstrap the store and show the profile")
    p_init.set_defaults(func=cmd_init)

    # next-number
    p_next = sub.add_parser("next-number", help="Show the next invoice number")
    p_next.set_defaults(func=cmd_next_number)

    # log
    p_log = sub.add_parser("log", help="Show the action log")
    p_log.add_argument("--limit", type=int, default=0, help="Show only the N most recent entries")
    p_log.set_defaults(func=cmd_log)

    # inventory
    p_inv = sub.add_parser("inventory", help="List inventory items")
    p_inv.add_argument("--search", default="", help="Filter by name or description")
    p_inv.set_defaults(func=cmd_inventory)

    # invoices
    p_invoices = sub.add_parser("invoices", help="List invoices, newest first")
    p_invoices.add_argument("--search", default="", help="Filter by customer or number")
    p_invoices.add_argument(
        "--status", choices=[s.value for s in InvoiceStatus], help="Filter by status"
    )
    p_invoices.set_defaults(func=cmd_invoices)

    # reset-log
    p_reset = sub.add_parser("reset-log", help="Clear the action log")
    p_reset.add_argument("--yes", action="store_true", help="Confirm the reset")
    p_reset.set_defaults(func=cmd_reset_log)

    return parser


async def run(args: argparse.Namespace) -> int:
    services = await open_services(get_settings())
    try:
        return await args.func(services, args)
    finally:
        await services.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings(), level=args.log_level)
    try:
        return asyncio.run(run(args))
    except InvoiceFlowError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 2
