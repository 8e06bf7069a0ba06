from __future__ import annotations

from urllib.parse import urlparse


DONE_BODY = '<?xml version="1.0" encoding="UTF-8" ?>\n<result code="done" />\n'
NOT_FOUND_BODY = '<?xml version="1.0" encoding="UTF-8" ?>\n<result code="item not found" />\n'


class FakeResponse:
	def __init__(self, text: str, status_code: int = 200):
		self.text = text
		self.status_code = status_code


class FakeTransport:
	"""
	Records every GET and answers with canned bodies, one per call.
	"""

	def __init__(self, *bodies: str, status_code: int = 200):
		self.bodies = list(bodies)
		self.status_code = status_code
		self.calls = []
		self.closed = False

	def get(self, url, params=None, **kwargs):
		self.calls.append({"url": url, "params": dict(params or {}), **kwargs})
		return FakeResponse(self.bodies.pop(0), self.status_code)

	def close(self):
		self.closed = True


class FakePinboard(FakeTransport):
	"""
	In-memory stand-in for the posts/add and posts/delete methods.
	"""

	def __init__(self):
		super().__init__()
		self.pins = {}

	def get(self, url, params=None, **kwargs):
		params = dict(params or {})
		self.calls.append({"url": url, "params": params, **kwargs})
		method = urlparse(url).path.rsplit("/posts/", 1)[-1]

		if method == "add":
			if params.get("replace") == "no" and params["url"] in self.pins:
				return FakeResponse('<result code="item already exists" />')
			self.pins[params["url"]] = params
			return FakeResponse(DONE_BODY)

		if method == "delete":
			if self.pins.pop(params["url"], None) is None:
				return FakeResponse(NOT_FOUND_BODY)
			return FakeResponse(DONE_BODY)

		return FakeResponse("", status_code=404)
