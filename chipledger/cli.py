#!/usr/bin/env python3
"""CLI tool for chip ledger accounting."""
import asyncio
import json
import sys
from datetime import date

from chipledger.client import ApiClient, ApiError, CashierService
from chipledger.ledger import (
    ChipBreakdown,
    Denomination,
    fold_running_balance,
    format_ledger_table,
    summarize,
)
from chipledger.utils.formatters import format_breakdown, format_currency
from chipledger.utils.logger import set_level


def parse_breakdown(args: list[str]) -> ChipBreakdown:
    """Parse ``100=2 500=1`` style arguments into a breakdown.
    
    Raises:
        ValueError: If an argument is malformed or names an unknown chip.
    """
    counts = {}
    for arg in args:
        face, sep, count = arg.partition("=")
        if not sep or not face.isdigit() or not count.isdigit():
            raise ValueError(f"Expected <denomination>=<count>, got '{arg}'")
        try:
            denomination = Denomination(int(face))
        except ValueError:
            raise ValueError(f"Unknown denomination: {face}") from None
        counts[denomination.key] = int(count)
    return ChipBreakdown(**counts)


def show_value(args: list[str]):
    """Print the value of a chip breakdown."""
    breakdown = parse_breakdown(args)
    print(f"{format_breakdown(breakdown)} = {format_currency(breakdown.total())}")


def print_ledger(transactions) -> None:
    """Fold and print a ledger with its totals."""
    entries = fold_running_balance(transactions)
    print(format_ledger_table(entries))
    
    summary = summarize(entries)
    print(f"\nChips out: {format_currency(summary.chips_out)}")
    print(f"Chips in:  {format_currency(summary.chips_in)}")
    print(f"Total: {summary.entries} movements")


def show_ledger_file(path: str):
    """Print the running balance of a JSON transaction export."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    
    if isinstance(data, dict):
        data = data.get("movements") or data.get("transactions") or data.get("data") or []
    if not isinstance(data, list):
        raise ValueError("Expected a list of transactions")
    if not all(isinstance(item, dict) for item in data):
        raise ValueError("Expected every transaction to be a JSON object")
    
    print_ledger(data)


async def fetch_ledger(day: str):
    """Fetch a day's chip ledger from the backend and print it."""
    date.fromisoformat(day)
    service = CashierService(ApiClient())
    transactions = await service.get_chip_ledger(day)
    print_ledger(transactions)


def print_usage():
    """Print usage information."""
    print("""
Chip Ledger CLI

Usage:
  python -m chipledger.cli [-v] <command> [args]

Commands:
  value <denom>=<count>...   Value a chip breakdown
  ledger <file.json>         Running balance of a transaction export
  fetch <YYYY-MM-DD>         Fetch and print a day's chip ledger

Examples:
  python -m chipledger.cli value 100=2 500=1
  python -m chipledger.cli ledger movements.json
  python -m chipledger.cli fetch 2024-01-15
""")


def main():
    """Main CLI entry point."""
    if "-v" in sys.argv or "--verbose" in sys.argv:
        sys.argv = [a for a in sys.argv if a not in ("-v", "--verbose")]
        set_level("DEBUG")
    
    if len(sys.argv) < 2:
        print_usage()
        sys.exit(1)
    
    command = sys.argv[1].lower()
    
    try:
        if command == "value":
            if len(sys.argv) < 3:
                print("Error: Chip counts required.")
                print("Usage: python -m chipledger.cli value <denom>=<count>...")
                sys.exit(1)
            show_value(sys.argv[2:])
        
        elif command == "ledger":
            if len(sys.argv) < 3:
                print("Error: File required.")
                print("Usage: python -m chipledger.cli ledger <file.json>")
                sys.exit(1)
            show_ledger_file(sys.argv[2])
        
        elif command == "fetch":
            if len(sys.argv) < 3:
                print("Error: Date required.")
                print("Usage: python -m chipledger.cli fetch <YYYY-MM-DD>")
                sys.exit(1)
            asyncio.run(fetch_ledger(sys.argv[2]))
        
        elif command in ("help", "-h", "--help"):
            print_usage()
        
        else:
            print(f"Unknown command: {command}")
            print_usage()
            sys.exit(1)
    
    except (ValueError, OSError, ApiError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
