"""Chip denominations and breakdown valuation."""
from dataclasses import dataclass, asdict
from enum import IntEnum
from typing import Any, Iterator, Mapping, Union

from chipledger.utils.coercion import coerce_amount, coerce_count


class Denomination(IntEnum):
    """Face values of the physical chips, in whole rupees."""
    R100 = 100
    R500 = 500
    R1000 = 1000
    R5000 = 5000
    R10000 = 10000
    
    @property
    def key(self) -> str:
        """Record field holding the count for this denomination."""
        return f"chips_{self.value}"
    
    @property
    def label(self) -> str:
        """Short display label, e.g. ``₹5K``."""
        if self.value >= 1000:
            return f"₹{self.value // 1000}K"
        return f"₹{self.value}"


# Generic chip input grid.
FULL_SET: tuple[Denomination, ...] = tuple(Denomination)

# Tip, expense, rakeback, deposit and float dialogs have no ₹1,000 chip.
TABLE_SET: tuple[Denomination, ...] = (
    Denomination.R100,
    Denomination.R500,
    Denomination.R5000,
    Denomination.R10000,
)


@dataclass(frozen=True)
class ChipBreakdown:
    """Counts of physical chips per denomination."""
    chips_100: int = 0
    chips_500: int = 0
    chips_1000: int = 0
    chips_5000: int = 0
    chips_10000: int = 0
    
    def __post_init__(self):
        for name in ("chips_100", "chips_500", "chips_1000", "chips_5000", "chips_10000"):
            object.__setattr__(self, name, coerce_count(getattr(self, name)))
    
    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ChipBreakdown":
        """Read the ``chips_*`` keys of a backend record; missing keys are 0."""
        if not record:
            return cls()
        return cls(**{d.key: record.get(d.key) for d in Denomination})
    
    def count(self, denomination: Denomination) -> int:
        """Number of chips of one denomination."""
        return getattr(self, denomination.key)
    
    def total(self, denominations: tuple[Denomination, ...] = FULL_SET) -> int:
        """Monetary value of the chips in the given denomination set."""
        return sum(self.count(d) * d.value for d in denominations)
    
    def items(
        self, denominations: tuple[Denomination, ...] = FULL_SET
    ) -> Iterator[tuple[Denomination, int]]:
        """Yield (denomination, count) pairs with a non-zero count."""
        for d in denominations:
            count = self.count(d)
            if count > 0:
                yield d, count
    
    def is_empty(self, denominations: tuple[Denomination, ...] = FULL_SET) -> bool:
        """True when no chips of the given set are present."""
        return self.total(denominations) == 0
    
    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)


def chip_value(
    source: Union[ChipBreakdown, Mapping[str, Any], None],
    denominations: tuple[Denomination, ...] = FULL_SET,
) -> int:
    """Total value of a chip breakdown.
    
    Args:
        source: A ChipBreakdown or any record carrying ``chips_*`` keys.
        denominations: Denomination set that applies to the caller.
        
    Returns:
        Non-negative value in whole rupees.
    """
    if isinstance(source, ChipBreakdown):
        return source.total(denominations)
    return ChipBreakdown.from_record(source or {}).total(denominations)
