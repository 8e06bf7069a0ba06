from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol


class Response(Protocol):
	status_code: int
	text: str


class Transport(Protocol):
	def get(
		self,
		url: str,
		params: Optional[Mapping[str, Any]] = None,
		**kwargs: Any,
	) -> Response:
		"""
		Issue a single GET request and return the response.
		`requests.Session` satisfies this protocol.
		"""
		...

	def close(self) -> None:
		"""Release pooled connections."""
		...

