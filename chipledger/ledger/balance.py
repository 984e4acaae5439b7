"""Running balance of chips in circulation."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Union

from chipledger.ledger.denominations import Denomination, FULL_SET
from chipledger.ledger.transactions import (
    Direction,
    Transaction,
    as_transaction,
    classify,
    transaction_value,
)
from chipledger.utils.formatters import format_currency, format_date_time
from chipledger.utils.logger import get_logger

logger = get_logger(__name__)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class LedgerEntry:
    """A transaction annotated with its chip value and the balance after it."""
    transaction: Transaction
    value: int
    direction: Direction
    label: str
    running_balance: int
    
    @property
    def signed_value(self) -> int:
        """Value as it affects circulation: positive out, negative in."""
        return self.value if self.direction is Direction.OUT else -self.value
    
    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = self.transaction.to_dict()
        data.update({
            "chip_value": self.value,
            "direction": self.direction.value,
            "label": self.label,
            "running_balance": self.running_balance,
        })
        return data


@dataclass(frozen=True)
class LedgerSummary:
    """Totals over a folded ledger."""
    chips_out: int
    chips_in: int
    entries: int
    closing_balance: int
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "chips_out": self.chips_out,
            "chips_in": self.chips_in,
            "entries": self.entries,
            "closing_balance": self.closing_balance,
        }


def _sort_key(transaction: Transaction) -> datetime:
    return transaction.timestamp or _EARLIEST


def fold_running_balance(
    transactions: Iterable[Union[Transaction, Mapping[str, Any]]],
    denominations: tuple[Denomination, ...] = FULL_SET,
) -> list[LedgerEntry]:
    """Fold transactions into a running balance of chips in circulation.
    
    Transactions are ordered oldest first (stable, so equal timestamps keep
    their input order; records without a timestamp come first). Chips going
    out raise the balance; chips coming back lower it, never below zero.
    
    Args:
        transactions: Transactions or raw backend records, in any order.
        denominations: Denomination set used to value chip breakdowns.
        
    Returns:
        One entry per transaction, carrying the balance after applying it.
    """
    ordered = sorted((as_transaction(t) for t in transactions), key=_sort_key)
    
    balance = 0
    entries = []
    for transaction in ordered:
        value = transaction_value(transaction, denominations)
        classification = classify(transaction)
        
        if classification.direction is Direction.OUT:
            balance += value
        else:
            balance = max(0, balance - value)
        
        entries.append(LedgerEntry(
            transaction=transaction,
            value=value,
            direction=classification.direction,
            label=classification.label,
            running_balance=balance,
        ))
    
    logger.debug(f"Folded {len(entries)} transactions, {balance} in circulation")
    return entries


def chips_in_circulation(
    transactions: Iterable[Union[Transaction, Mapping[str, Any]]],
    denominations: tuple[Denomination, ...] = FULL_SET,
) -> int:
    """Closing balance after folding the transactions (0 when empty)."""
    entries = fold_running_balance(transactions, denominations)
    return entries[-1].running_balance if entries else 0


def summarize(entries: list[LedgerEntry]) -> LedgerSummary:
    """Total the chips that went out and came back over a folded ledger."""
    chips_out = sum(e.value for e in entries if e.direction is Direction.OUT)
    chips_in = sum(e.value for e in entries if e.direction is Direction.IN)
    return LedgerSummary(
        chips_out=chips_out,
        chips_in=chips_in,
        entries=len(entries),
        closing_balance=entries[-1].running_balance if entries else 0,
    )


def _row(time_str: str, player: str, action: str, badge: str, value: str, balance: str) -> str:
    return (
        f"| {time_str:<15} | {player:<12} | {action:<15} | {badge:<9} "
        f"| {value:>12} | {balance:>12} |"
    )


def format_ledger_table(entries: list[LedgerEntry]) -> str:
    """Format a folded ledger as a text table.
    
    Args:
        entries: Output of fold_running_balance.
        
    Returns:
        Formatted table string.
    """
    if not entries:
        return "No chip movements yet."
    
    header = _row("Time", "Player", "Action", "Dir", "Value", "Balance")
    lines = [header, "|" + "".join("-" if c != "|" else "|" for c in header[1:])]
    
    for e in entries:
        t = e.transaction
        when = format_date_time(t.timestamp)
        time_str = f"{when['date']} {when['time']}".strip() or "-"
        player = t.player_name or t.dealer_name or "System"
        sign = "+" if e.direction is Direction.OUT else "−"
        lines.append(_row(
            time_str,
            player,
            e.label,
            e.direction.badge,
            f"{sign}{format_currency(e.value)}",
            format_currency(e.running_balance),
        ))
    
    closing = format_currency(entries[-1].running_balance)
    lines.append(f"| {'TOTAL CHIPS IN CIRCULATION':<75} | {closing:>12} |")
    
    return "\n".join(lines)
