"""Tests for chip denominations and breakdown valuation."""
import math

from chipledger.ledger.denominations import (
    ChipBreakdown,
    Denomination,
    FULL_SET,
    TABLE_SET,
    chip_value,
    coerce_amount,
    coerce_count,
)


class TestCoercion:
    """Test defensive numeric coercion."""
    
    def test_coerce_count_numbers(self):
        """Test ints pass through and floats truncate."""
        assert coerce_count(3) == 3
        assert coerce_count(3.9) == 3
        assert coerce_count(0) == 0
    
    def test_coerce_count_strings(self):
        """Test strings use their leading digits."""
        assert coerce_count("12") == 12
        assert coerce_count(" 7 ") == 7
        assert coerce_count("2abc") == 2
        assert coerce_count("3.9") == 3
        assert coerce_count("abc") == 0
        assert coerce_count("") == 0
    
    def test_coerce_count_never_negative(self):
        """Test negatives and junk become zero."""
        assert coerce_count(-5) == 0
        assert coerce_count("-5") == 0
        assert coerce_count(None) == 0
        assert coerce_count(True) == 0
        assert coerce_count(math.nan) == 0
        assert coerce_count(math.inf) == 0
        assert coerce_count([1, 2]) == 0
    
    def test_coerce_amount(self):
        """Test monetary coercion keeps sign and fractions."""
        assert coerce_amount("5000.00") == 5000
        assert isinstance(coerce_amount("5000.00"), int)
        assert coerce_amount("12.5") == 12.5
        assert coerce_amount(-300) == -300
        assert coerce_amount(None) == 0
        assert coerce_amount("n/a") == 0
        assert coerce_amount(math.nan) == 0


class TestDenomination:
    """Test denomination metadata."""
    
    def test_keys_and_labels(self):
        """Test record keys and display labels."""
        assert Denomination.R100.key == "chips_100"
        assert Denomination.R10000.key == "chips_10000"
        assert Denomination.R500.label == "₹500"
        assert Denomination.R5000.label == "₹5K"
        assert Denomination.R10000.label == "₹10K"
    
    def test_sets(self):
        """Test the table set has no ₹1,000 chip."""
        assert len(FULL_SET) == 5
        assert Denomination.R1000 in FULL_SET
        assert Denomination.R1000 not in TABLE_SET
        assert len(TABLE_SET) == 4


class TestChipBreakdown:
    """Test ChipBreakdown valuation."""
    
    def test_empty_is_zero(self):
        """Test absent counts value to zero."""
        assert ChipBreakdown().total() == 0
        assert chip_value({}) == 0
        assert chip_value(None) == 0
        assert ChipBreakdown().is_empty()
    
    def test_small_breakdown(self):
        """Test 2 x 100 + 1 x 500."""
        breakdown = ChipBreakdown.from_record(
            {"chips_100": 2, "chips_500": 1, "chips_5000": 0, "chips_10000": 0}
        )
        assert breakdown.total() == 700
    
    def test_all_denominations(self):
        """Test the full weighted sum."""
        record = {
            "chips_100": 1,
            "chips_500": 2,
            "chips_1000": 3,
            "chips_5000": 4,
            "chips_10000": 5,
        }
        assert chip_value(record) == 100 + 1000 + 3000 + 20000 + 50000
        assert chip_value(record, TABLE_SET) == 100 + 1000 + 20000 + 50000
    
    def test_garbage_counts(self):
        """Test bad counts never produce a negative or NaN total."""
        record = {"chips_100": "x", "chips_500": -4, "chips_5000": None, "chips_10000": "1"}
        assert chip_value(record) == 10000
    
    def test_constructor_coerces(self):
        """Test direct construction coerces counts too."""
        breakdown = ChipBreakdown(chips_100="3", chips_500=-1)
        assert breakdown.chips_100 == 3
        assert breakdown.chips_500 == 0
    
    def test_items_skip_zero_counts(self):
        """Test items() yields only chips present."""
        breakdown = ChipBreakdown(chips_100=2, chips_5000=1)
        assert list(breakdown.items()) == [
            (Denomination.R100, 2),
            (Denomination.R5000, 1),
        ]
    
    def test_to_dict(self):
        """Test serialization uses record keys."""
        data = ChipBreakdown(chips_500=1).to_dict()
        assert data == {
            "chips_100": 0,
            "chips_500": 1,
            "chips_1000": 0,
            "chips_5000": 0,
            "chips_10000": 0,
        }
