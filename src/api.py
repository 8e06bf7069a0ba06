"""
Client factory.

Builds a PinboardPoster from a ClientConfig so callers never touch the
constructor arguments directly.
"""

from __future__ import annotations

import logging
from typing import Optional

from config import ClientConfig
from interfaces import Transport
from pinboard_poster import PinboardPoster


class APIFactory:
	@staticmethod
	def from_config(
		cfg: ClientConfig,
		transport: Optional[Transport] = None,
		logger: Optional[logging.Logger] = None,
	) -> PinboardPoster:
		"""
		Build a poster for the given configuration.

		Args:
			cfg: Token, endpoint and timeout.
			transport: Optional pre-built HTTP transport (e.g. a shared session).
			logger: Optional logger; defaults to the module logger.
		"""
		return PinboardPoster(
			cfg.api_token,
			api_endpoint=cfg.api_endpoint,
			transport=transport,
			logger=logger,
			timeout=cfg.timeout_seconds,
		)
