from dataclasses import FrozenInstanceError
from datetime import datetime, timezone, timedelta

import pytest

from pin_config import PinConfig, PinConfigBuilder, normalize_tags


URL = "https://example.com"
DESC = "Example Description"


def test_builder_with_mandatory_fields():
	pin = PinConfigBuilder(URL, DESC).build()

	assert pin.url == URL
	assert pin.description == DESC
	assert pin.extended == ""
	assert pin.tags == ()
	assert pin.replace is True
	assert pin.shared is True
	assert pin.to_read is False
	assert pin.dt.tzinfo is not None


def test_builder_chains_every_setter():
	dt = datetime(1997, 8, 29, 2, 14, tzinfo=timezone(timedelta(hours=-4)))
	pin = (
		PinConfigBuilder(URL, DESC)
		.url("https://new-url.com")
		.description("Updated Description")
		.extended("Extended description for testing")
		.tags("tag1", "tag2", "tag3")
		.dt(dt)
		.replace(False)
		.shared(False)
		.to_read(True)
		.build()
	)

	assert pin == PinConfig(
		url="https://new-url.com",
		description="Updated Description",
		extended="Extended description for testing",
		tags=("tag1", "tag2", "tag3"),
		dt=dt,
		replace=False,
		shared=False,
		to_read=True,
	)


def test_pin_config_is_immutable():
	pin = PinConfigBuilder(URL, DESC).build()
	with pytest.raises(FrozenInstanceError):
		pin.url = "https://other.example"


def test_builders_compare_by_fields():
	dt = datetime(2023, 1, 1, tzinfo=timezone.utc)
	a = PinConfigBuilder(URL, DESC).dt(dt).tags("x")
	b = PinConfigBuilder(URL, DESC).dt(dt).tags("x")

	assert a == b
	assert a != b.to_read(True)
	assert "tags=['x']" in repr(a)


def test_normalize_tags():
	assert normalize_tags(None) == ()
	assert normalize_tags("") == ()
	assert normalize_tags("test kotlin") == ("test", "kotlin")
	assert normalize_tags("a, b,,c") == ("a", "b", "c")
	assert normalize_tags(["one", " ", "two "]) == ("one", "two")


def test_builder_is_unhashable():
	builder = PinConfigBuilder(URL, DESC)
	with pytest.raises(TypeError):
		hash(builder)
	with pytest.raises(TypeError):
		{builder}
