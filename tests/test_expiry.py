"""
Tests for expiration classification.
"""
from datetime import date, timedelta

import pytest

from expiry import alerts, classify, days_until, parse_date

TODAY = date(2026, 3, 10)


class TestClassify:

    @pytest.mark.parametrize(
        "offset, status",
        [(-5, "expired"), (-1, "expired"), (0, "soon"), (3, "soon"), (4, "ok"), (30, "ok")],
    )
    def test_boundaries(self, offset, status):
        st = classify(TODAY + timedelta(days=offset), TODAY, soon_days=3)
        assert st.status == status
        assert st.days_left == offset

    def test_custom_window(self):
        assert classify(TODAY + timedelta(days=6), TODAY, soon_days=7).status == "soon"

    def test_days_until_defaults_to_today(self):
        assert days_until(date.today()) == 0


class TestParseDate:

    def test_iso_date(self):
        assert parse_date("2026-03-10") == TODAY

    def test_surrounding_spaces(self):
        assert parse_date(" 2026-03-10 ") == TODAY

    @pytest.mark.parametrize("bad", ["", "10.03.2026", "2026-13-01", "tomorrow"])
    def test_rejects_malformed(self, bad):
        with pytest.raises(ValueError):
            parse_date(bad)


class TestAlerts:

    def test_only_expired_and_soon_sorted(self):
        items = [
            {"id": 1, "name": "Ost", "expiration_date": TODAY + timedelta(days=2)},
            {"id": 2, "name": "Melk", "expiration_date": TODAY - timedelta(days=1)},
            {"id": 3, "name": "Ris", "expiration_date": TODAY + timedelta(days=200)},
        ]
        out = alerts(items, TODAY, soon_days=3)
        assert [(a["name"], a["status"], a["days_left"]) for a in out] == [
            ("Melk", "expired", -1),
            ("Ost", "soon", 2),
        ]

    def test_input_is_not_mutated(self):
        items = [{"id": 1, "expiration_date": TODAY}]
        alerts(items, TODAY)
        assert "status" not in items[0]
