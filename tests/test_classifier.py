"""Tests for IPO date parsing and status classification."""

import datetime
import pytest

from models import IPOStatus
from sources.ipo.classifier import classify, parse_date


D = datetime.date


# ---------------------------------------------------------------------------
# parse_date
# ---------------------------------------------------------------------------

class TestParseDate:
    def test_dash_separated(self):
        assert parse_date("05-03-2025") == D(2025, 3, 5)

    def test_slash_separated(self):
        assert parse_date("05/03/2025") == D(2025, 3, 5)

    def test_mixed_separators(self):
        assert parse_date("05-03/2025") == D(2025, 3, 5)

    def test_surrounding_whitespace(self):
        assert parse_date("  5-3-2025 ") == D(2025, 3, 5)

    @pytest.mark.parametrize("value", [None, "", "-", "Not Issued", "not issued", "  "])
    def test_placeholders_are_absent(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize("value", ["TBA", "Mar 5, 2025", "2025-03", "05-03-25", "31-02-2025", "1-2-3-4"])
    def test_unparsable_is_absent(self, value):
        assert parse_date(value) is None


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

class TestClassify:
    OPEN, CLOSE, LISTING = "01-01-2025", "10-01-2025", "20-01-2025"

    def test_inside_window_is_ongoing(self):
        assert classify(self.OPEN, self.CLOSE, self.LISTING, D(2025, 1, 5)) == IPOStatus.ONGOING

    def test_after_listing_is_listed(self):
        assert classify(self.OPEN, self.CLOSE, self.LISTING, D(2025, 1, 25)) == IPOStatus.LISTED

    def test_before_open_is_upcoming(self):
        assert classify(self.OPEN, self.CLOSE, self.LISTING, D(2024, 12, 1)) == IPOStatus.UPCOMING

    def test_window_bounds_inclusive(self):
        assert classify(self.OPEN, self.CLOSE, None, D(2025, 1, 1)) == IPOStatus.ONGOING
        assert classify(self.OPEN, self.CLOSE, None, D(2025, 1, 10)) == IPOStatus.ONGOING

    def test_listing_day_is_listed(self):
        assert classify(self.OPEN, self.CLOSE, self.LISTING, D(2025, 1, 20)) == IPOStatus.LISTED

    def test_past_listing_beats_open_window(self):
        # Listing already happened even though today falls inside [open, close]
        assert classify("01-01-2025", "10-01-2025", "03-01-2025", D(2025, 1, 5)) == IPOStatus.LISTED

    def test_future_listing_does_not_override_window(self):
        assert classify(self.OPEN, self.CLOSE, "20-02-2025", D(2025, 1, 5)) == IPOStatus.ONGOING

    def test_closed_not_yet_listed_is_upcoming(self):
        assert classify(self.OPEN, self.CLOSE, self.LISTING, D(2025, 1, 15)) == IPOStatus.UPCOMING

    def test_closed_without_listing_is_upcoming(self):
        assert classify(self.OPEN, self.CLOSE, "Not Issued", D(2025, 3, 1)) == IPOStatus.UPCOMING

    def test_all_absent_defaults_to_upcoming(self):
        assert classify(None, None, None, D(2025, 1, 5)) == IPOStatus.UPCOMING

    def test_missing_close_defaults_to_upcoming(self):
        assert classify(self.OPEN, "-", None, D(2025, 1, 5)) == IPOStatus.UPCOMING

    def test_garbage_never_raises(self):
        assert classify("??", 42, object(), D(2025, 1, 5)) == IPOStatus.UPCOMING

    def test_today_defaults_to_current_date(self):
        today = datetime.date.today()
        open_date = (today - datetime.timedelta(days=1)).strftime("%d-%m-%Y")
        close_date = (today + datetime.timedelta(days=1)).strftime("%d-%m-%Y")
        assert classify(open_date, close_date, None) == IPOStatus.ONGOING
