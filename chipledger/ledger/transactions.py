"""Ledger transactions and chip direction classification."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Union

from chipledger.ledger.denominations import (
    ChipBreakdown,
    Denomination,
    FULL_SET,
    coerce_amount,
)
from chipledger.utils.coercion import parse_timestamp


class TransactionType(str, Enum):
    """Transaction and activity types recorded by the backend."""
    BUY_IN = "buy_in"
    CASH_PAYOUT = "cash_payout"
    CREDIT_ISSUED = "credit_issued"
    ISSUE_CREDIT = "issue_credit"
    SETTLE_CREDIT = "settle_credit"
    DEPOSIT_CHIPS = "deposit_chips"
    RETURN_CHIPS = "return_chips"
    DEALER_TIP = "dealer_tip"
    PLAYER_EXPENSE = "player_expense"
    RAKEBACK = "rakeback"
    CLUB_EXPENSE = "club_expense"
    ADD_FLOAT = "add_float"
    EXPENSE = "expense"


class Direction(str, Enum):
    """Which way chips move relative to the house inventory."""
    OUT = "out"
    IN = "in"
    
    @property
    def badge(self) -> str:
        return "CHIPS OUT" if self is Direction.OUT else "CHIPS IN"


@dataclass(frozen=True)
class Classification:
    """Direction and display label of a transaction."""
    direction: Direction
    label: str


UNKNOWN_LABEL = "Chip Movement"

# Chips leave the house.
_OUT_LABELS = {
    TransactionType.BUY_IN: "Buy In",
    TransactionType.CREDIT_ISSUED: "Credit Issued",
    TransactionType.ISSUE_CREDIT: "Credit Issued",
    TransactionType.RAKEBACK: "Rakeback",
}

# Chips leave the house only when the record carries chips.
_CHIP_GATED_LABELS = {
    TransactionType.DEALER_TIP: "Dealer Tip",
    TransactionType.PLAYER_EXPENSE: "Player Expense",
}

# Chips come back, or the movement is cash only.
_IN_LABELS = {
    TransactionType.CASH_PAYOUT: "Cash Payout",
    TransactionType.RETURN_CHIPS: "Chips Returned",
    TransactionType.DEPOSIT_CHIPS: "Chips Returned",
    TransactionType.SETTLE_CREDIT: "Settle Credit",
    TransactionType.ADD_FLOAT: "Add Float",
    TransactionType.EXPENSE: "Expense",
    TransactionType.CLUB_EXPENSE: "Club Expense",
}


@dataclass(frozen=True)
class Transaction:
    """A single ledger event as fetched from the backend."""
    id: Optional[str] = None
    transaction_type: str = ""
    activity_type: str = ""
    breakdown: ChipBreakdown = field(default_factory=ChipBreakdown)
    amount: Union[int, float] = 0
    chip_amount: Union[int, float] = 0
    created_at: Optional[datetime] = None
    issued_at: Optional[datetime] = None
    player_id: Optional[str] = None
    player_name: Optional[str] = None
    dealer_name: Optional[str] = None
    notes: Optional[str] = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)
    
    def __post_init__(self):
        for name in ("created_at", "issued_at"):
            object.__setattr__(self, name, parse_timestamp(getattr(self, name)))
    
    @property
    def kind(self) -> str:
        """Type used for classification: activity type first."""
        return self.activity_type or self.transaction_type
    
    @property
    def timestamp(self) -> Optional[datetime]:
        """Creation time, falling back to the issue time for credits."""
        return self.created_at or self.issued_at
    
    @property
    def chip_total(self) -> int:
        """Chip amount of the record: the explicit field, else the breakdown."""
        explicit = coerce_amount(self.chip_amount)
        if explicit > 0:
            return int(explicit)
        return self.breakdown.total()
    
    def to_dict(self) -> dict:
        """Convert back to the backend's field names."""
        data = dict(self.raw)
        data.update({
            "id": self.id,
            "transaction_type": self.transaction_type or None,
            "activity_type": self.activity_type or None,
            "amount": self.amount,
            "chip_amount": self.chip_amount,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "issued_at": self.issued_at.isoformat() if self.issued_at else None,
            "player_id": self.player_id,
            "player_name": self.player_name,
            "dealer_name": self.dealer_name,
            "notes": self.notes,
        })
        data.update(self.breakdown.to_dict())
        return data
    
    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        """Create from a backend JSON record.
        
        The chip breakdown is read from a nested ``chip_breakdown`` object when
        present, otherwise from the record's own ``chips_*`` keys.
        """
        nested = record.get("chip_breakdown")
        breakdown = ChipBreakdown.from_record(
            nested if isinstance(nested, Mapping) else record
        )
        record_id = record.get("transaction_id", record.get("id"))
        player_id = record.get("player_id")
        
        return cls(
            id=str(record_id) if record_id is not None else None,
            transaction_type=record.get("transaction_type") or "",
            activity_type=record.get("activity_type") or "",
            breakdown=breakdown,
            amount=coerce_amount(record.get("amount")),
            chip_amount=coerce_amount(record.get("chip_amount", record.get("chips_amount"))),
            created_at=parse_timestamp(record.get("created_at")),
            issued_at=parse_timestamp(record.get("issued_at")),
            player_id=str(player_id) if player_id is not None else None,
            player_name=record.get("player_name"),
            dealer_name=record.get("dealer_name"),
            notes=record.get("notes"),
            raw=dict(record),
        )


def as_transaction(item: Union[Transaction, Mapping[str, Any]]) -> Transaction:
    """Accept either a Transaction or a raw backend record."""
    if isinstance(item, Transaction):
        return item
    return Transaction.from_record(item)


def classify(transaction: Union[Transaction, Mapping[str, Any]]) -> Classification:
    """Decide whether a transaction moves chips out of or into the house.
    
    Unrecognized types are treated as chips leaving the house under the
    generic "Chip Movement" label rather than rejected.
    
    Args:
        transaction: Transaction or raw backend record.
        
    Returns:
        The direction and display label.
    """
    transaction = as_transaction(transaction)
    kind = transaction.kind
    
    try:
        ttype = TransactionType(kind)
    except ValueError:
        return Classification(Direction.OUT, UNKNOWN_LABEL)
    
    if ttype in _OUT_LABELS:
        return Classification(Direction.OUT, _OUT_LABELS[ttype])
    if ttype in _CHIP_GATED_LABELS:
        direction = Direction.OUT if transaction.chip_total > 0 else Direction.IN
        return Classification(direction, _CHIP_GATED_LABELS[ttype])
    return Classification(Direction.IN, _IN_LABELS[ttype])


def transaction_value(
    transaction: Union[Transaction, Mapping[str, Any]],
    denominations: tuple[Denomination, ...] = FULL_SET,
) -> int:
    """Chip value of a transaction.
    
    The chip breakdown wins; records without one fall back to their
    ``chip_amount``. Never negative.
    """
    transaction = as_transaction(transaction)
    value = transaction.breakdown.total(denominations)
    if value > 0:
        return value
    return max(0, int(coerce_amount(transaction.chip_amount)))
