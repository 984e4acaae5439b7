"""Dealer tip splits and float history totals."""
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

from chipledger.ledger.denominations import TABLE_SET, chip_value, coerce_amount

Number = Union[int, float]


@dataclass(frozen=True)
class TipSplit:
    """How a dealer tip is divided between cash paid out and chips kept."""
    chip_value: int
    cash_percentage: Number
    cash_paid: Number
    chips_retained: Number
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "chip_value": self.chip_value,
            "cash_percentage": self.cash_percentage,
            "cash_paid": self.cash_paid,
            "chips_retained": self.chips_retained,
        }


def dealer_tip_split(value: Any, cash_percentage: Any) -> TipSplit:
    """Split a dealer tip into the cash paid to the dealer and the rest.
    
    Args:
        value: Chip value of the tip.
        cash_percentage: Share paid out in cash, clamped to 0-100.
        
    Returns:
        The split.
    """
    total = max(0, int(coerce_amount(value)))
    percentage = min(100, max(0, coerce_amount(cash_percentage)))
    cash_paid = coerce_amount(total * percentage / 100)
    return TipSplit(
        chip_value=total,
        cash_percentage=percentage,
        cash_paid=cash_paid,
        chips_retained=coerce_amount(total - cash_paid),
    )


@dataclass(frozen=True)
class FloatSummary:
    """Totals over a session's float additions."""
    total_additions: int
    total_cash_added: Number
    total_chips_added: int
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total_additions": self.total_additions,
            "total_cash_added": self.total_cash_added,
            "total_chips_added": self.total_chips_added,
        }


def summarize_float_history(additions: Iterable[Mapping[str, Any]]) -> FloatSummary:
    """Total the cash and chips an owner added to a session's float."""
    additions = list(additions)
    cash = sum(
        coerce_amount(a.get("float_amount") or a.get("amount")) for a in additions
    )
    chips = sum(chip_value(a, TABLE_SET) for a in additions)
    return FloatSummary(
        total_additions=len(additions),
        total_cash_added=coerce_amount(cash),
        total_chips_added=chips,
    )
