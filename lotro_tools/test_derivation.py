"""
Unit tests for core/derivation.py - Stat Calculator and Item Comparison math.

Uses a two-class table where Might fans out to two derived stats:
- Might -> Critical Rating: Warrior 2.0, Mage 0
- Might -> Outgoing Healing: Warrior 0.5, Mage 1
- Will -> Tactical Mastery: Warrior 0, Mage 2.5
"""
import logging

import pytest
from lotro_tools.core import (
    ComparisonMode,
    Contribution,
    calculate_derivative_rows,
    calculate_derived_stats,
    coerce_amount,
    compare_items,
    comparison_mode_from_string,
    derivative_rows_to_frame,
    expand_contribution,
    parse_contributions,
    parse_csv_text,
)

TABLE_CSV = """Primary Stat,Derived Stat,Warrior,Mage
Might,Critical Rating,2.0,0
Might,Outgoing Healing,0.5,1
Will,Tactical Mastery,0,2.5
"""


@pytest.fixture
def table():
    return parse_csv_text(TABLE_CSV)


class TestCoerceAmount:
    """Tests for coerce_amount()."""

    @pytest.mark.parametrize("raw,expected", [
        (10, 10.0),
        (2.5, 2.5),
        ("15", 15.0),
        (" -3.25 ", -3.25),
        ("0", 0.0),
    ])
    def test_numeric_values(self, raw, expected):
        assert coerce_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "nan", "inf", float("nan"), True, 10**400])
    def test_unusable_values_are_none(self, raw):
        """Invalid input means no contribution, never an exception."""
        assert coerce_amount(raw) is None


class TestParseContributions:
    """Tests for parse_contributions()."""

    def test_pairs_become_contributions(self):
        result = parse_contributions([("Might", "10"), ("Will", 4)])
        assert result == [Contribution("Might", 10.0), Contribution("Will", 4.0)]

    def test_blank_and_invalid_entries_dropped(self):
        result = parse_contributions([("", 5), (None, 5), ("Might", ""), ("Might", "x"), ("Will", 2)])
        assert result == [Contribution("Will", 2.0)]

    def test_contribution_objects_pass_through(self):
        assert parse_contributions([Contribution("Might", 3)]) == [Contribution("Might", 3.0)]

    def test_none_is_empty(self):
        assert parse_contributions(None) == []


class TestExpandContribution:
    """Tests for expand_contribution()."""

    def test_primary_stat_fans_out(self, table):
        effects = expand_contribution(table, "Warrior", Contribution("Might", 10))
        assert effects == {"Critical Rating": 20.0, "Outgoing Healing": 5.0}

    def test_derived_stat_passes_through(self, table):
        effects = expand_contribution(table, "Warrior", Contribution("Critical Rating", 7))
        assert effects == {"Critical Rating": 7.0}

    def test_pass_through_disabled(self, table):
        effects = expand_contribution(table, "Warrior", Contribution("Critical Rating", 7), direct=False)
        assert effects == {}


class TestCalculateDerivedStats:
    """Tests for single-item (Stat Calculator) mode."""

    def test_warrior_might_ten(self, table):
        """Might 10 as Warrior -> 20 Critical Rating, 5 Outgoing Healing."""
        result = calculate_derived_stats(table, "Warrior", "Might", 10)
        assert result == {"Critical Rating": 20.00, "Outgoing Healing": 5.00}

    def test_string_amount(self, table):
        assert calculate_derived_stats(table, "Warrior", "Might", "10") == {
            "Critical Rating": 20.0, "Outgoing Healing": 5.0,
        }

    def test_zero_amount_is_all_zero(self, table):
        result = calculate_derived_stats(table, "Warrior", "Might", 0)
        assert result
        assert all(v == 0 for v in result.values())

    @pytest.mark.parametrize("k", [3, -2.5, 7.25, 1000])
    def test_linear_in_amount(self, table, k):
        """derivation(k) == k * derivation(1), up to display rounding."""
        unit = calculate_derived_stats(table, "Mage", "Might", 1)
        scaled = calculate_derived_stats(table, "Mage", "Might", k)
        assert scaled.keys() == unit.keys()
        for name in unit:
            assert scaled[name] == pytest.approx(k * unit[name], abs=0.005)

    def test_zero_multiplier_contributes_zero(self, table):
        """Mage has no Might -> Critical Rating conversion."""
        result = calculate_derived_stats(table, "Mage", "Might", 10)
        assert result == {"Critical Rating": 0.0, "Outgoing Healing": 10.0}

    def test_rounded_to_two_decimals(self, table):
        result = calculate_derived_stats(table, "Warrior", "Might", 0.334)
        assert result["Critical Rating"] == 0.67
        assert result["Outgoing Healing"] == 0.17

    @pytest.mark.parametrize("selected_class,stat,amount", [
        ("", "Might", 10),
        (None, "Might", 10),
        ("Warrior", "", 10),
        ("Warrior", "Might", ""),
        ("Warrior", "Might", "abc"),
    ])
    def test_missing_input_is_empty(self, table, selected_class, stat, amount):
        assert calculate_derived_stats(table, selected_class, stat, amount) == {}

    def test_unknown_primary_stat_is_empty(self, table):
        assert calculate_derived_stats(table, "Warrior", "Fate", 10) == {}


class TestCalculatorGrid:
    """Tests for calculate_derivative_rows() and derivative_rows_to_frame()."""

    def test_rows_per_derived_stat(self, table):
        rows = calculate_derivative_rows(table, "Might", "10", ["Warrior", "Mage"])
        assert [r.derived_stat for r in rows] == ["Critical Rating", "Outgoing Healing"]
        assert rows[0].values == {"Warrior": 20.0, "Mage": 0.0}
        assert rows[1].values == {"Warrior": 5.0, "Mage": 10.0}

    def test_values_follow_column_order(self, table):
        rows = calculate_derivative_rows(table, "Might", 10, ["Mage", "Warrior"])
        assert list(rows[0].values) == ["Mage", "Warrior"]

    def test_hidden_classes_excluded(self, table):
        rows = calculate_derivative_rows(table, "Might", 10, ["Warrior", "Mage"], {"Warrior": False, "Mage": True})
        assert all(list(r.values) == ["Mage"] for r in rows)

    def test_invalid_amount_gives_no_rows(self, table):
        assert calculate_derivative_rows(table, "Might", "", ["Warrior"]) == []

    def test_frame_shape(self, table):
        rows = calculate_derivative_rows(table, "Will", 2, ["Warrior", "Mage"])
        frame = derivative_rows_to_frame(rows, ["Mage", "Warrior"])
        assert list(frame.columns) == ["Mage", "Warrior"]
        assert list(frame.index) == ["Tactical Mastery"]
        assert frame.loc["Tactical Mastery", "Mage"] == 5.0


class TestAggregateComparison:
    """Tests for compare_items() in AGGREGATE mode."""

    def test_might_ten_to_fifteen(self, table):
        """Swapping 10 Might for 15 Might as Warrior."""
        result = compare_items(table, "Warrior", [("Might", 10)], [("Might", 15)])
        assert result == pytest.approx({"Critical Rating": 10.0, "Outgoing Healing": 2.5})

    def test_identical_items_are_empty(self, table):
        item = [("Might", "10"), ("Will", "4"), ("Critical Rating", "3")]
        assert compare_items(table, "Mage", item, list(item)) == {}

    def test_derived_stat_added_directly(self, table):
        result = compare_items(table, "Warrior", [], [("Critical Rating", "30")])
        assert result == {"Critical Rating": 30.0}

    def test_item1_only_is_negative(self, table):
        result = compare_items(table, "Warrior", [("Might", 4)], [])
        assert result == pytest.approx({"Critical Rating": -8.0, "Outgoing Healing": -2.0})

    def test_mixed_primary_and_direct(self, table):
        """Different stats on each item combine into one delta map."""
        result = compare_items(table, "Mage", [("Critical Rating", 5)], [("Will", 2), ("Might", 1)])
        assert result == pytest.approx({
            "Critical Rating": -5.0,
            "Outgoing Healing": 1.0,
            "Tactical Mastery": 5.0,
        })

    def test_tiny_deltas_filtered(self, table):
        result = compare_items(table, "Warrior", [], [("Critical Rating", "0.0005")])
        assert result == {}

    def test_zero_multiplier_only_is_empty(self, table):
        """Will gives Warrior nothing, so the delta disappears."""
        assert compare_items(table, "Warrior", [], [("Will", 100)]) == {}

    def test_invalid_values_ignored(self, table):
        result = compare_items(table, "Warrior", [("Might", "")], [("Might", "abc"), ("", 5)])
        assert result == {}

    def test_out_of_range_amount_ignored(self, table):
        """An int too large for a float is no contribution."""
        assert compare_items(table, "Warrior", [], [("Might", 10**400)]) == {}
        assert calculate_derived_stats(table, "Warrior", "Might", 10**400) == {}

    def test_unset_class_is_empty(self, table):
        assert compare_items(table, "", [("Might", 10)], [("Might", 15)]) == {}

    def test_empty_items_are_empty(self, table):
        assert compare_items(table, "Warrior", [], []) == {}

    def test_empty_table_is_empty(self):
        from lotro_tools.core import StatTable
        assert compare_items(StatTable.empty(), "Warrior", [], [("Might", 1)]) == {}


class TestPairedComparison:
    """Tests for compare_items() in PAIRED_DIFF mode."""

    def test_might_ten_to_fifteen(self, table):
        result = compare_items(table, "Warrior", [("Might", 10)], [("Might", 15)], ComparisonMode.PAIRED_DIFF)
        assert result == pytest.approx({"Critical Rating": 10.0, "Outgoing Healing": 2.5})

    def test_identical_items_are_all_zero(self, table):
        item = [("Might", 10), ("Will", 4)]
        result = compare_items(table, "Mage", item, list(item), ComparisonMode.PAIRED_DIFF)
        assert result
        assert all(v == 0 for v in result.values())

    def test_unmatched_stats_ignored(self, table):
        result = compare_items(table, "Warrior", [("Might", 10)], [("Will", 4)], ComparisonMode.PAIRED_DIFF)
        assert result == {}

    def test_no_direct_pass_through(self, table):
        result = compare_items(
            table, "Warrior", [("Critical Rating", 1)], [("Critical Rating", 5)], ComparisonMode.PAIRED_DIFF
        )
        assert result == {}

    def test_no_epsilon_filter(self, table):
        result = compare_items(table, "Warrior", [("Might", 10)], [("Might", 10.0001)], ComparisonMode.PAIRED_DIFF)
        assert result["Critical Rating"] == pytest.approx(0.0002)

    def test_repeated_stat_summed_per_item(self, table):
        result = compare_items(
            table, "Warrior", [("Might", 4), ("Might", 6)], [("Might", 15)], ComparisonMode.PAIRED_DIFF
        )
        assert result == pytest.approx({"Critical Rating": 10.0, "Outgoing Healing": 2.5})

    def test_mode_by_name(self, table):
        result = compare_items(table, "Warrior", [("Might", 10)], [("Will", 4)], "paired")
        assert result == {}


class TestComparisonModeFromString:
    """Tests for comparison_mode_from_string()."""

    @pytest.mark.parametrize("value,expected", [
        ("aggregate", ComparisonMode.AGGREGATE),
        ("AGGREGATE", ComparisonMode.AGGREGATE),
        ("paired", ComparisonMode.PAIRED_DIFF),
        ("paired-diff", ComparisonMode.PAIRED_DIFF),
        (ComparisonMode.PAIRED_DIFF, ComparisonMode.PAIRED_DIFF),
    ])
    def test_known_names(self, value, expected):
        assert comparison_mode_from_string(value) == expected

    def test_unknown_falls_back(self):
        assert comparison_mode_from_string("sideways") == ComparisonMode.AGGREGATE
        assert comparison_mode_from_string("sideways", default=None) is None

    def test_unknown_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lotro_tools.core.derivation"):
            comparison_mode_from_string("sideways")
        assert "sideways" in caplog.text
