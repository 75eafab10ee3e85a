"""Tests for formatting helpers."""

import math

import pytest

from racial_scaling.core.formatters import (
    extract_priority,
    format_duration,
    format_file_size,
    format_multiplier,
    format_progress,
    generate_folder_name,
    generate_multiplier_array,
    is_height_mod,
    pad_number,
    pluralize,
    sanitize_folder_name,
    sanitize_target_path,
    truncate_text,
)


class TestFormatMultiplier:
    """Test multiplier display formatting."""

    def test_strips_trailing_zeros(self) -> None:
        """Test whole and fractional values lose trailing zeros."""
        assert format_multiplier(2.0) == "2"
        assert format_multiplier(1.5) == "1.5"
        assert format_multiplier(0.333333, 3) == "0.333"

    def test_non_numeric_input(self) -> None:
        """Test invalid input yields the fallback string instead of raising."""
        assert format_multiplier("abc") == "0.000"
        assert format_multiplier(None) == "0.000"
        assert format_multiplier(float("nan")) == "0.000"

    def test_numeric_string(self) -> None:
        """Test numeric strings are formatted like numbers."""
        assert format_multiplier("1.250") == "1.25"


class TestFolderNames:
    """Test folder name generation and sanitizing."""

    def test_generate_folder_name(self) -> None:
        """Test the folder name layout with and without prefix."""
        assert generate_folder_name(1.5, "MAX", "") == "[1500] Height MAX - 1.5x"
        assert generate_folder_name(0.5, "MIN", "Foo") == "Foo[0500] Height MIN - 0.5x"

    def test_digits_follow_multiplier_order(self) -> None:
        """Test larger multipliers get larger bracketed numbers."""
        names = [generate_folder_name(m, "MAX") for m in (0.1, 0.55, 1.0, 2.25)]
        priorities = [extract_priority(name) for name in names]
        assert priorities == sorted(priorities)
        assert priorities[0] == 100

    def test_sanitize_folder_name(self) -> None:
        """Test every illegal path character is replaced."""
        assert sanitize_folder_name('a<b>c:d"e/f\\g|h?i*j') == "a_b_c_d_e_f_g_h_i_j"
        assert sanitize_folder_name("[1500] Height MAX - 1.5x") == "[1500] Height MAX - 1.5x"

    def test_sanitize_target_path(self) -> None:
        """Test target path cleanup keeps slashes and defaults when empty."""
        assert sanitize_target_path("  Mods/Height  ") == "Mods/Height"
        assert sanitize_target_path('Mo<d>s?') == "Mods"
        assert sanitize_target_path("") == "NewHeightMods"
        assert sanitize_target_path(None) == "NewHeightMods"
        assert sanitize_target_path("***") == "NewHeightMods"


class TestPriority:
    """Test priority extraction and height mod detection."""

    def test_extract_priority(self) -> None:
        """Test the first bracketed number is used."""
        assert extract_priority("[0500] Height MIN - 0.5x") == 500
        assert extract_priority("Foo[1500] Height MAX - 1.5x [2]") == 1500
        assert extract_priority("No number here") == 0
        assert extract_priority("") == 0

    def test_is_height_mod(self) -> None:
        """Test detection requires Height and MIN or MAX."""
        assert is_height_mod("[0500] Height MIN - 0.5x")
        assert is_height_mod("Custom Height MAX")
        assert not is_height_mod("Height tweaks")
        assert not is_height_mod("MAX hair volume")


class TestMultiplierArray:
    """Test multiplier range expansion."""

    @pytest.mark.parametrize(
        "min_value, max_value, step",
        [(0.5, 2.0, 0.1), (0.5, 1.0, 0.5), (0.1, 0.35, 0.1), (1.0, 1000.0, 7.3), (0.001, 0.05, 0.01)],
    )
    def test_array_properties(self, min_value: float, max_value: float, step: float) -> None:
        """Test ascending order, anchoring at min and expected length."""
        result = generate_multiplier_array(min_value, max_value, step)

        assert result[0] == min_value
        assert all(a < b for a, b in zip(result, result[1:]))
        assert result[-1] <= max_value
        assert max_value - result[-1] < step + 1e-9
        assert len(result) == math.floor((max_value - min_value) / step + 1e-10) + 1

    def test_includes_max_despite_float_drift(self) -> None:
        """Test 0.1 steps reach the upper bound exactly."""
        result = generate_multiplier_array(0.5, 2.0, 0.1)
        assert len(result) == 16
        assert result[-1] == 2.0
        assert 0.7 in result

    def test_empty_results(self) -> None:
        """Test invalid ranges produce an empty list."""
        assert generate_multiplier_array(1.0, 2.0, 0) == []
        assert generate_multiplier_array(1.0, 2.0, -0.1) == []
        assert generate_multiplier_array(2.0, 1.0, 0.1) == []
        assert generate_multiplier_array("a", 1.0, 0.1) == []

    def test_single_value(self) -> None:
        """Test min == max yields a single multiplier."""
        assert generate_multiplier_array(1.0, 1.0, 0.1) == [1.0]


class TestTextHelpers:
    """Test small text helpers."""

    def test_pad_number(self) -> None:
        assert pad_number(5) == "0005"
        assert pad_number(12345) == "12345"

    def test_format_file_size(self) -> None:
        assert format_file_size(0) == "0 Bytes"
        assert format_file_size(512) == "512 Bytes"
        assert format_file_size(1536) == "1.5 KB"
        assert format_file_size(10 * 1024 * 1024) == "10 MB"

    def test_format_duration(self) -> None:
        assert format_duration(3000) == "3s"
        assert format_duration(125000) == "2m 5s"
        assert format_duration(3723000) == "1h 2m 3s"

    def test_format_progress(self) -> None:
        progress = format_progress(1, 4)
        assert progress["percentage"] == 25
        assert progress["text"] == "1 of 4"
        assert format_progress(0, 0)["percentage"] == 0

    def test_pluralize_and_truncate(self) -> None:
        assert pluralize(1, "mod") == "1 mod"
        assert pluralize(3, "mod") == "3 mods"
        assert pluralize(2, "entry", "entries") == "2 entries"
        assert truncate_text("short") == "short"
        assert truncate_text("x" * 60, 10) == "xxxxxxx..."
