"""
tests/test_aggregate.py
-----------------------
Tests for turning the raw City of Chicago export into the two
dashboard inputs, and for the pipeline runner's script selection.

Run with:
    pytest tests/test_aggregate.py -v
"""

import pandas as pd
import pytest

import run_all
from utils.aggregate import clean_raw, community_counts, daily_counts, unmatched_areas

AREA_NAMES = {1: "ROGERS PARK", 32: "LOOP"}


@pytest.fixture
def raw():
    return pd.DataFrame({
        "Date": [
            "01/15/2012 10:30:00 PM",
            "01/15/2012 01:00:00 AM",
            "02/01/2013 12:00:00 PM",
            "02/01/2013 12:05:00 PM",
            "garbage",
        ],
        "Community Area": ["1", "2", "32", None, "1"],
    })


class TestCleanRaw:

    def test_unparseable_dates_dropped(self, raw):
        assert len(clean_raw(raw)) == 4

    def test_pm_times_parsed(self, raw):
        clean = clean_raw(raw)
        assert clean["datetime"].iloc[0] == pd.Timestamp("2012-01-15 22:30:00")

    def test_area_is_nullable_int(self, raw):
        clean = clean_raw(raw)
        assert clean["area"].isna().sum() == 1
        assert clean["area"].dropna().tolist() == [1, 2, 32]


class TestDailyCounts:

    def test_counts_per_day(self, raw):
        daily = daily_counts(clean_raw(raw))
        assert daily["Date"].tolist() == ["2012-01-15", "2013-02-01"]
        assert daily["Crimes"].tolist() == [2, 2]

    def test_columns_match_input_file(self, raw):
        assert list(daily_counts(clean_raw(raw)).columns) == ["Date", "Crimes"]


class TestCommunityCounts:

    def test_counts_per_year_and_community(self, raw):
        counts = community_counts(clean_raw(raw), AREA_NAMES)
        rows = list(counts.itertuples(index=False, name=None))
        assert rows == [(2012, "ROGERS PARK", 1), (2013, "LOOP", 1)]

    def test_unmatched_areas(self, raw):
        assert unmatched_areas(clean_raw(raw), AREA_NAMES) == [2]

    def test_columns_match_input_file(self, raw):
        counts = community_counts(clean_raw(raw), AREA_NAMES)
        assert list(counts.columns) == ["year", "Community Area", "Crimes"]


class TestSelectScripts:

    def test_all_by_default(self):
        assert run_all.select_scripts() == run_all.SCRIPTS

    def test_from(self):
        assert [n for n, _ in run_all.select_scripts(from_script="02")] == ["02"]

    def test_from_unknown(self):
        with pytest.raises(ValueError):
            run_all.select_scripts(from_script="99")

    def test_only_ignores_unknown(self):
        assert [n for n, _ in run_all.select_scripts(only_scripts=["01", "99"])] == ["01"]

    def test_main_stops_at_failed_script(self, monkeypatch):
        ran = []

        def fake_run(number, path):
            ran.append(number)
            return 1

        monkeypatch.setattr(run_all, "run_script", fake_run)
        monkeypatch.setattr(run_all.sys, "argv", ["run_all.py"])
        with pytest.raises(SystemExit) as exc:
            run_all.main()
        assert ran == ["01"]
        assert "--from 01" in str(exc.value.code)
