from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlparse
from xml.etree import ElementTree

import requests

from interfaces import Transport
from pin_config import PinConfig, normalize_tags
from util import format_instant, yes_no

API_ENDPOINT = "https://api.pinboard.in/v1/"
AUTH_TOKEN = "auth_token"
DONE = "done"
USER_AGENT = "pinboard-poster/1.0 (+https://pinboard.in/api/)"
DEFAULT_TIMEOUT = 30.0

LOGGER_NAME = "pinboard_poster"

_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9]+:[A-Za-z0-9]+$")


class PinboardError(Exception):
	"""Base class for errors reported by the Pinboard API client."""


class PinboardRemoteError(PinboardError):
	"""
	The service answered, but not with the success marker.

	`code` holds the `code` attribute of the `<result>` element when the
	response carried one.
	"""

	def __init__(
		self,
		message: str,
		code: Optional[str] = None,
		status_code: Optional[int] = None,
		body: str = "",
	):
		super().__init__(message)
		self.code = code
		self.status_code = status_code
		self.body = body


class PinboardParseError(PinboardRemoteError):
	"""The response body was neither a success marker nor well-formed XML."""


def parse_response(body: str, status_code: Optional[int] = None) -> bool:
	"""
	Interpret a raw `posts/add` or `posts/delete` response body.

	Returns True when the body contains the success marker. Otherwise the
	body is parsed as XML and the `<result code="...">` value is surfaced.

	Raises:
		PinboardParseError: the body is empty or not well-formed XML.
		PinboardRemoteError: the body is XML without the success marker.
	"""
	body = body or ""
	if DONE in body:
		return True

	try:
		root = ElementTree.fromstring(body)
	except ElementTree.ParseError as e:
		raise PinboardParseError(
			f"Unable to parse response (HTTP {status_code}): {body.strip()!r}",
			status_code=status_code,
			body=body,
		) from e

	result = root if root.tag == "result" else root.find(".//result")
	code = result.get("code") if result is not None else None
	if code:
		message = f"Pinboard returned an error: {code}"
	else:
		message = f"Pinboard returned an unexpected response (HTTP {status_code})"
	raise PinboardRemoteError(message, code=code, status_code=status_code, body=body)


class PinboardPoster:
	"""
	Minimal client for the Pinboard `posts/add` and `posts/delete` methods.

	Invalid input or configuration is logged and reported by a False return
	before any request is made. Transport failures are logged and also
	return False. A response from the service that is not a success raises
	PinboardRemoteError (or PinboardParseError).
	"""

	def __init__(
		self,
		api_token: str,
		api_endpoint: str = API_ENDPOINT,
		transport: Optional[Transport] = None,
		logger: Optional[logging.Logger] = None,
		timeout: float = DEFAULT_TIMEOUT,
	):
		"""
		Args:
			api_token: API token in `user:TOKEN` form.
			api_endpoint: Base URL the method paths are resolved against.
			transport: Object with a `requests.Session`-compatible `get`.
				A new session is created when omitted.
			logger: Logger for request tracing and failures.
			timeout: Seconds passed to the transport for every request.
		"""
		self.api_token = api_token
		self.api_endpoint = api_endpoint
		self.transport = transport if transport is not None else requests.Session()
		self.logger = logger or logging.getLogger(LOGGER_NAME)
		self.timeout = timeout

	def __enter__(self) -> PinboardPoster:
		return self

	def __exit__(self, *exc) -> None:
		self.close()

	def close(self) -> None:
		self.transport.close()

	def add_pin(
		self,
		url: str,
		description: str,
		extended: str = "",
		tags: Iterable[str] | str = (),
		dt: Optional[datetime] = None,
		replace: bool = True,
		shared: bool = True,
		to_read: bool = False,
	) -> bool:
		"""
		Add a bookmark.

		Args:
			url: URL of the bookmark.
			description: Title of the bookmark.
			extended: Longer description, omitted when blank.
			tags: Tags as a sequence or a space/comma separated string.
			dt: Creation time, defaults to now.
			replace: Replace any existing bookmark for the URL.
			shared: Make the bookmark public.
			to_read: Mark the bookmark as unread.

		Returns:
			True when the pin was added, False on invalid input,
			invalid configuration, or a transport failure.
		"""
		if not self.validate():
			return False
		if not self.is_valid_url(url):
			self.logger.error("Please specify a valid URL to pin.")
			return False
		if not description or not description.strip():
			self.logger.error("Please specify a valid description.")
			return False

		params: Dict[str, Any] = {
			"url": url,
			"description": description,
		}
		if extended and extended.strip():
			params["extended"] = extended
		tag_list = normalize_tags(tags)
		if tag_list:
			params["tags"] = ",".join(tag_list)
		params["dt"] = format_instant(dt or datetime.now(timezone.utc))
		params["replace"] = yes_no(replace)
		params["shared"] = yes_no(shared)
		params["toread"] = yes_no(to_read)

		return self._execute("posts/add", params)

	def add_pin_config(self, pin: PinConfig) -> bool:
		"""Add a bookmark described by a PinConfig."""
		return self.add_pin(
			pin.url,
			pin.description,
			extended=pin.extended,
			tags=pin.tags,
			dt=pin.dt,
			replace=pin.replace,
			shared=pin.shared,
			to_read=pin.to_read,
		)

	def delete_pin(self, url: str) -> bool:
		"""
		Delete the bookmark for `url`.

		Returns True when the pin was deleted, False on invalid input,
		invalid configuration, or a transport failure.
		"""
		if not self.validate():
			return False
		if not self.is_valid_url(url):
			self.logger.error("Please specify a valid URL to delete.")
			return False

		return self._execute("posts/delete", {"url": url})

	def endpoint_path(self, method: str) -> str:
		"""
		Resolve a method path against the configured endpoint, with exactly
		one slash between them. A blank endpoint yields `method` unchanged.
		"""
		base = self.api_endpoint or ""
		if not base.strip():
			return method
		return f"{base.rstrip('/')}/{method.lstrip('/')}"

	def validate(self) -> bool:
		"""Check the API token and endpoint, logging the first problem found."""
		if not self.api_token or not _TOKEN_PATTERN.fullmatch(self.api_token):
			self.logger.error("Please specify a valid API token. (eg. user:TOKEN)")
			return False
		if not self.is_valid_url(self.api_endpoint):
			self.logger.error(
				"Please specify a valid API end point. (eg. %s)", API_ENDPOINT
			)
			return False
		return True

	def is_valid_url(self, url: str) -> bool:
		if not url or not url.strip():
			return False
		try:
			parsed = urlparse(url)
			# accessing port validates it
			parsed.port
		except ValueError as e:
			self.logger.debug("Invalid URL: %s (%s)", url, e)
			return False
		if not parsed.scheme or not parsed.netloc:
			self.logger.debug("Invalid URL: %s", url)
			return False
		return True

	def _execute(self, method: str, params: Dict[str, Any]) -> bool:
		"""
		Issue the GET request for `method` and interpret its response.
		Transport failures are logged and reported as False.
		"""
		api_url = self.endpoint_path(method)
		params[AUTH_TOKEN] = self.api_token

		self.logger.debug("HTTP Request: GET %s %s", api_url, _redact(params))
		try:
			r = self.transport.get(
				api_url,
				params=params,
				headers={"User-Agent": USER_AGENT},
				timeout=self.timeout,
			)
		except requests.RequestException as e:
			self.logger.error("Request to %s failed: %s", api_url, e)
			return False

		self.logger.debug("HTTP Result: %s", r.status_code)
		body = r.text or ""
		self.logger.debug("HTTP Response:\n%s", body)

		try:
			return parse_response(body, status_code=r.status_code)
		except PinboardError as e:
			self.logger.error("%s failed: %s", method, e)
			raise


def _redact(params: Dict[str, Any]) -> Dict[str, Any]:
	"""Copy of the query parameters with the secret half of the token hidden."""
	shown = dict(params)
	token = shown.get(AUTH_TOKEN)
	if token:
		user = token.split(":", 1)[0]
		shown[AUTH_TOKEN] = f"{user}:***"
	return shown
