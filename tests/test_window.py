"""Unit tests for window resolution."""
from datetime import datetime, timedelta, timezone

import pytest

from processor.window import WindowHints, parse_window_hints, resolve_window

BASE = datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)


class TestParseWindowHints:
    """Test cases for parse_window_hints."""

    @pytest.mark.parametrize('notes', [None, '', 'QRV 20m CW and SSB'])
    def test_no_hints(self, notes):
        """Test that text without hints yields no overrides."""
        assert parse_window_hints(notes) == WindowHints(hours_after=None, hours_before=None)

    @pytest.mark.parametrize('notes', ['s+2 S-5', 'S-5 then s+2', 'window S+2,s-5'])
    def test_both_hints_any_order_and_case(self, notes):
        """Test that S+ and S- are read independently of order and case."""
        assert parse_window_hints(notes) == WindowHints(hours_after=2, hours_before=5)

    def test_first_match_wins(self):
        """Test that only the first hint of each sign is used."""
        assert parse_window_hints('S+1 or maybe S+4') == WindowHints(hours_after=1, hours_before=None)

    def test_multi_digit_without_upper_bound(self):
        """Test that large hour counts are accepted verbatim."""
        assert parse_window_hints('S+48').hours_after == 48

    @pytest.mark.parametrize('notes', ['S+\u0665 S-\uff12', 's+\u0663', 'S-\u09e8'])
    def test_non_ascii_digits_are_ignored(self, notes):
        """Test that only ASCII digits count as hour values."""
        assert parse_window_hints(notes) == WindowHints(hours_after=None, hours_before=None)

    def test_requires_digits(self):
        """Test that a sign without digits is not a hint."""
        assert parse_window_hints('S+ S-') == WindowHints(hours_after=None, hours_before=None)


class TestResolveWindow:
    """Test cases for resolve_window."""

    def test_default_window(self):
        """Test one hour before and three hours after by default."""
        start, end = resolve_window(BASE)

        assert start == BASE - timedelta(hours=1)
        assert end == BASE + timedelta(hours=3)

    def test_hints_override_independently(self):
        """Test that a single hint leaves the other default in place."""
        start, end = resolve_window(BASE, 'S+2')

        assert start == BASE - timedelta(hours=1)
        assert end == BASE + timedelta(hours=2)

        start, end = resolve_window(BASE, 's-5')

        assert start == BASE - timedelta(hours=5)
        assert end == BASE + timedelta(hours=3)

    def test_zero_width_window_is_kept(self):
        """Test that S+0 S-0 produces an empty window without adjustment."""
        start, end = resolve_window(BASE, 'S+0 S-0')

        assert start == end == BASE

    def test_non_ascii_digits_keep_default_window(self):
        """Test that hints written with non-ASCII digits leave the defaults."""
        start, end = resolve_window(BASE, 'S+٥ S-２')

        assert start == BASE - timedelta(hours=1)
        assert end == BASE + timedelta(hours=3)
