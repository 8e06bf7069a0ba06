from datetime import datetime, timezone


def parse_time(value: str) -> datetime:
	"""
	Parse an ISO8601 timestamp into a timezone-aware datetime.
	Supports trailing 'Z' (UTC) and offset-aware strings.
	Naive timestamps are taken as UTC.
	"""
	if not value:
		raise ValueError("timestamp is empty")
	value = value.replace("Z", "+00:00")
	dt = datetime.fromisoformat(value)
	if dt.tzinfo is None:
		dt = dt.replace(tzinfo=timezone.utc)
	return dt


def format_instant(dt: datetime) -> str:
	"""
	Format a datetime as an ISO8601 UTC instant with seconds precision,
	e.g. '2023-01-01T12:34:56Z'. Naive datetimes are taken as UTC.
	"""
	if dt.tzinfo is None:
		dt = dt.replace(tzinfo=timezone.utc)
	return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def yes_no(flag: bool) -> str:
	return "yes" if flag else "no"
