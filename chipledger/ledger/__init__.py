"""Chip ledger accounting: valuation, direction and running balance."""
from .denominations import (
    ChipBreakdown,
    Denomination,
    FULL_SET,
    TABLE_SET,
    chip_value,
    coerce_amount,
    coerce_count,
)
from .transactions import (
    Classification,
    Direction,
    Transaction,
    TransactionType,
    classify,
    parse_timestamp,
    transaction_value,
)
from .balance import (
    LedgerEntry,
    LedgerSummary,
    chips_in_circulation,
    fold_running_balance,
    format_ledger_table,
    summarize,
)
from .filters import (
    cashbook_transactions,
    chip_ledger_transactions,
    credit_register_transactions,
    unique_players_count,
)
from .splits import FloatSummary, TipSplit, dealer_tip_split, summarize_float_history

__all__ = [
    "ChipBreakdown",
    "Denomination",
    "FULL_SET",
    "TABLE_SET",
    "chip_value",
    "coerce_amount",
    "coerce_count",
    "Classification",
    "Direction",
    "Transaction",
    "TransactionType",
    "classify",
    "parse_timestamp",
    "transaction_value",
    "LedgerEntry",
    "LedgerSummary",
    "chips_in_circulation",
    "fold_running_balance",
    "format_ledger_table",
    "summarize",
    "cashbook_transactions",
    "chip_ledger_transactions",
    "credit_register_transactions",
    "unique_players_count",
    "FloatSummary",
    "TipSplit",
    "dealer_tip_split",
    "summarize_float_history",
]
