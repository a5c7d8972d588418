"""Tests for cross-series alignment on the shared label axis."""

from datetime import datetime

from quemepongo.alignment.aligner import (
    align_series,
    build_labels,
    find_nearest_same_hour,
    match_values,
)
from quemepongo.config.schema import MatchStrategy


class TestBuildLabels:
    def test_range(self, now):
        labels = build_labels(now, 3)
        assert labels == [
            datetime(2026, 10, 19, 14),
            datetime(2026, 10, 19, 15),
            datetime(2026, 10, 19, 16),
            datetime(2026, 10, 19, 17),
            datetime(2026, 10, 19, 18),
        ]

    def test_midnight(self):
        labels = build_labels(datetime(2026, 1, 1, 0, 30), 1)
        assert labels[0] == datetime(2025, 12, 31, 23)
        assert labels[-1] == datetime(2026, 1, 1, 1)


class TestAlignSeries:
    def test_exact_match_leaves_gap(self, make_point, now):
        projection = [
            make_point("2026-10-19T14:00", temperature_2m=20.0),
            make_point("2026-10-19T15:00", temperature_2m=21.0),
            make_point("2026-10-19T16:00", temperature_2m=22.0),
        ]
        forecast = [
            make_point("2026-10-19T15:00", temperature_2m=19.0),
            make_point("2026-10-19T16:00", temperature_2m=19.5),
            make_point("2026-10-19T17:00", temperature_2m=18.0),
        ]
        aligned = align_series(forecast, projection, "temperature_2m", now, hours_ahead=1)
        assert [t.hour for t in aligned.labels] == [14, 15, 16]
        assert aligned.forecast == [None, 19.0, 19.5]
        assert aligned.projection == [20.0, 21.0, 22.0]

    def test_nearest_same_hour_when_dates_differ(self, make_point, now):
        forecast = [
            make_point("2026-10-18T15:00", temperature_2m=1.0),
            make_point("2026-10-20T15:00", temperature_2m=2.0),
            make_point("2026-10-19T16:00", temperature_2m=3.0),
        ]
        aligned = align_series(forecast, None, "temperature_2m", datetime(2026, 10, 19, 15, 10), 1)
        # labels 14, 15, 16: 15 has two candidates one day away each, first wins the tie
        assert aligned.forecast == [None, 1.0, 3.0]

    def test_nearest_prefers_closest(self, make_point):
        points = [
            make_point("2024-10-19T15:00", temperature_2m=1.0),
            make_point("2026-10-18T15:00", temperature_2m=2.0),
        ]
        match = find_nearest_same_hour(points, datetime(2026, 10, 19, 15))
        assert match.get("temperature_2m") == 2.0

    def test_raw_projection_template_dates_match_by_hour(self, make_point, now):
        projection = [
            make_point(f"2024-10-19T{h:02d}:00", temperature_2m=float(h)) for h in range(8)
        ]
        aligned = align_series(None, projection, "temperature_2m", now, hours_ahead=1)
        # hours 14-16 are absent and hours 0-7 never line up: positional pairing
        assert aligned.projection == [0.0, 1.0, 2.0]

    def test_positional_fallback_only_without_any_hour_match(self, make_point, now):
        forecast = [
            make_point("2026-10-19T03:00", temperature_2m=3.0),
            make_point("2026-10-19T15:00", temperature_2m=15.0),
        ]
        aligned = align_series(forecast, None, "temperature_2m", now, hours_ahead=1)
        assert aligned.forecast == [None, 15.0, None]

    def test_positional_disabled(self, make_point, now):
        forecast = [make_point("2026-10-19T03:00", temperature_2m=3.0)]
        values = match_values(
            forecast,
            build_labels(now, 1),
            "temperature_2m",
            [MatchStrategy.EXACT, MatchStrategy.NEAREST_HOUR],
        )
        assert values == [None, None, None]

    def test_exact_only_skips_nearest(self, make_point, now):
        forecast = [make_point("2026-10-18T15:00", temperature_2m=1.0)]
        values = match_values(
            forecast, build_labels(now, 1), "temperature_2m", [MatchStrategy.EXACT]
        )
        assert values == [None, None, None]

    def test_missing_value_stays_none(self, make_point, now):
        forecast = [make_point("2026-10-19T15:00", temperature_2m=None)]
        aligned = align_series(forecast, [], "temperature_2m", now, hours_ahead=1)
        assert aligned.forecast == [None, None, None]
        assert aligned.projection == [None, None, None]

    def test_other_variable(self, make_point, now):
        forecast = [make_point("2026-10-19T14:00", temperature_2m=10.0, precipitation=0.4)]
        aligned = align_series(forecast, None, "precipitation", now, hours_ahead=1)
        assert aligned.forecast[0] == 0.4
        assert aligned.variable == "precipitation"

    def test_to_dict_labels_iso(self, now):
        aligned = align_series(None, None, "temperature_2m", now, hours_ahead=1)
        assert aligned.to_dict()["labels"][0] == "2026-10-19T14:00"
