"""Views over a day's transactions: cashbook, chip ledger, credit register."""
from typing import Any, Iterable, Mapping

from chipledger.ledger.denominations import TABLE_SET, chip_value, coerce_amount

_CASH_TYPES = {"buy_in", "cash_payout", "settle_credit", "add_float", "expense"}
_CHIP_TYPES = {
    "buy_in",
    "cash_payout",
    "credit_issued",
    "issue_credit",
    "deposit_chips",
    "return_chips",
}
_CREDIT_TYPES = {"credit_issued", "settle_credit"}


def _positive(record: Mapping[str, Any], *keys: str) -> bool:
    """True when the first truthy field among keys is a positive amount."""
    for key in keys:
        if record.get(key):
            return coerce_amount(record[key]) > 0
    return False


def is_cash_movement(record: Mapping[str, Any]) -> bool:
    """Whether a record belongs in the cashbook."""
    if record.get("transaction_type") in _CASH_TYPES:
        return True
    
    activity = record.get("activity_type")
    if activity == "dealer_tip":
        return _positive(record, "cash_paid_to_dealer", "total_cash_paid")
    if activity == "club_expense":
        return True
    # Player expenses are paid in chips and stay off the cashbook.
    if activity == "player_expense":
        return False
    if activity == "rakeback" and _positive(record, "cash_amount"):
        return True
    
    return (
        coerce_amount(record.get("primary_amount")) != 0
        or coerce_amount(record.get("secondary_amount")) != 0
    )


def is_chip_movement(record: Mapping[str, Any]) -> bool:
    """Whether a record belongs in the chip ledger."""
    if record.get("transaction_type") in _CHIP_TYPES:
        return True
    
    activity = record.get("activity_type")
    if activity in ("dealer_tip", "player_expense") and _positive(record, "chip_amount"):
        return True
    if activity == "rakeback" and _positive(record, "amount", "chip_amount"):
        return True
    
    return chip_value(record, TABLE_SET) > 0


def cashbook_transactions(records: Iterable[Mapping[str, Any]]) -> list[dict]:
    """Records that moved cash."""
    return [r for r in records if is_cash_movement(r)]


def chip_ledger_transactions(records: Iterable[Mapping[str, Any]]) -> list[dict]:
    """Records that moved chips."""
    return [r for r in records if is_chip_movement(r)]


def credit_register_transactions(records: Iterable[Mapping[str, Any]]) -> list[dict]:
    """Credit issued and settled."""
    return [r for r in records if r.get("transaction_type") in _CREDIT_TYPES]


def unique_players_count(records: Iterable[Mapping[str, Any]]) -> int:
    """Number of distinct players appearing in the records."""
    return len({r["player_id"] for r in records if r.get("player_id")})
