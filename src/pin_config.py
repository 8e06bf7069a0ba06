from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Tuple


def _now() -> datetime:
	return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PinConfig:
	"""
	Parameters for adding a single pin.

	Mirrors the parameters of the Pinboard `posts/add` method:
	https://pinboard.in/api/#posts_add
	"""

	url: str                            # URL of the bookmark
	description: str                    # title of the bookmark
	extended: str = ""                  # longer description
	tags: Tuple[str, ...] = ()          # up to 100 tags
	dt: datetime = field(default_factory=_now)
	replace: bool = True                # replace any existing pin for the url
	shared: bool = True                 # make the pin public
	to_read: bool = False               # mark the pin as unread


class PinConfigBuilder:
	"""
	Accumulates pin fields before producing an immutable PinConfig.

	Every setter returns the builder so calls can be chained:

		PinConfigBuilder(url, "Title").tags("python", "api").to_read(True).build()
	"""

	def __init__(self, url: str, description: str):
		self._url = url
		self._description = description
		self._extended = ""
		self._tags: Tuple[str, ...] = ()
		self._dt = _now()
		self._replace = True
		self._shared = True
		self._to_read = False

	def url(self, url: str) -> PinConfigBuilder:
		self._url = url
		return self

	def description(self, description: str) -> PinConfigBuilder:
		self._description = description
		return self

	def extended(self, extended: str) -> PinConfigBuilder:
		self._extended = extended
		return self

	def tags(self, *tags: str) -> PinConfigBuilder:
		self._tags = tuple(tags)
		return self

	def dt(self, dt: datetime) -> PinConfigBuilder:
		self._dt = dt
		return self

	def replace(self, replace: bool) -> PinConfigBuilder:
		self._replace = replace
		return self

	def shared(self, shared: bool) -> PinConfigBuilder:
		self._shared = shared
		return self

	def to_read(self, to_read: bool) -> PinConfigBuilder:
		self._to_read = to_read
		return self

	def build(self) -> PinConfig:
		return PinConfig(
			url=self._url,
			description=self._description,
			extended=self._extended,
			tags=self._tags,
			dt=self._dt,
			replace=self._replace,
			shared=self._shared,
			to_read=self._to_read,
		)

	def _fields(self) -> Tuple:
		return (
			self._url,
			self._description,
			self._extended,
			self._tags,
			self._dt,
			self._replace,
			self._shared,
			self._to_read,
		)

	def __eq__(self, other) -> bool:
		if not isinstance(other, PinConfigBuilder):
			return NotImplemented
		return self._fields() == other._fields()

	__hash__ = None

	def __repr__(self) -> str:
		return (
			f"PinConfigBuilder(url={self._url!r}, description={self._description!r}, "
			f"extended={self._extended!r}, tags={list(self._tags)!r}, dt={self._dt.isoformat()}, "
			f"replace={self._replace}, shared={self._shared}, to_read={self._to_read})"
		)


def normalize_tags(tags: str | Iterable[str] | None) -> Tuple[str, ...]:
	"""
	Turn a tag string or sequence into an ordered tuple of non-blank tags.

	A single string is split on whitespace and commas, matching how Pinboard
	itself tokenizes the `tags` parameter.
	"""
	if not tags:
		return ()
	if isinstance(tags, str):
		tags = tags.replace(",", " ").split()
	return tuple(t.strip() for t in tags if t and t.strip())
