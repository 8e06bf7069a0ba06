from datetime import datetime, timezone, timedelta

import pytest

from util import format_instant, parse_time, yes_no


def test_parse_time_handles_z_suffix():
	result = parse_time("2023-01-01T12:34:56Z")
	assert result == datetime(2023, 1, 1, 12, 34, 56, tzinfo=timezone.utc)


def test_parse_time_preserves_timezone_offset():
	result = parse_time("2023-01-01T09:00:00+09:00")
	assert result.hour == 9
	assert result.utcoffset() == timedelta(hours=9)


def test_parse_time_assumes_utc_for_naive():
	assert parse_time("2023-01-01T09:00:00").tzinfo == timezone.utc


def test_parse_time_rejects_empty_string():
	with pytest.raises(ValueError):
		parse_time("")


def test_format_instant_converts_to_utc_seconds():
	dt = datetime(2023, 1, 1, 9, 0, 0, 123456, tzinfo=timezone(timedelta(hours=9)))
	assert format_instant(dt) == "2023-01-01T00:00:00Z"


def test_format_instant_treats_naive_as_utc():
	assert format_instant(datetime(2023, 5, 1, 12, 34, 56)) == "2023-05-01T12:34:56Z"


def test_yes_no():
	assert yes_no(True) == "yes"
	assert yes_no(False) == "no"
