from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Dict, Mapping
import yaml

from humanfriendly import InvalidTimespan, parse_timespan

from pinboard_poster import API_ENDPOINT, DEFAULT_TIMEOUT


TOKEN_ENV_VAR = "PINBOARD_API_TOKEN"
TOKEN_PROPERTY = "pinboard-api-token"
DEFAULT_PROPERTIES_FILE = Path("local.properties")


def _ensure_quantity_expression(expr: str) -> str:
	"""Add a default quantity when a human-friendly duration is missing one."""
	expr = expr.strip()
	if not expr:
		raise ValueError("empty duration expression")
	if any(ch.isdigit() for ch in expr):
		return expr
	return f"1 {expr}"


def _parse_timeout(value: str | int | float) -> float:
	"""
	Parse a request timeout.
	Supported forms:
	- numeric seconds (int/float)
	- strings like "30 seconds", "2 minutes", "minute"
	"""
	if isinstance(value, bool):
		raise TypeError("Boolean is not a valid timeout")

	if isinstance(value, (int, float)):
		if value <= 0:
			raise ValueError("timeout must be positive")
		return float(value)

	if isinstance(value, str):
		text = value.strip()
		if not text:
			raise ValueError("empty timeout string")
		try:
			seconds = parse_timespan(_ensure_quantity_expression(text))
		except InvalidTimespan as e:
			raise ValueError(f"invalid timeout: {text!r}") from e
		if seconds <= 0:
			raise ValueError("timeout must be positive")
		return seconds

	raise TypeError(f"Unsupported timeout value type: {type(value)!r}")


###############################################################################
# Client configuration
###############################################################################

@dataclass
class ClientConfig:
	"""
	Credentials and endpoint for a Pinboard account.
	"""

	api_token: str                      # user:TOKEN
	api_endpoint: str = API_ENDPOINT    # base URL for API methods
	timeout_seconds: float = DEFAULT_TIMEOUT


###############################################################################
# Credential sources
###############################################################################

def token_from_literal(token: str) -> str:
	"""Use the given token as-is (surrounding whitespace removed)."""
	return (token or "").strip()


def token_from_mapping(mapping: Mapping[str, str], key: str = TOKEN_PROPERTY) -> str:
	"""Read the token from an in-memory mapping; empty when the key is missing."""
	return token_from_literal(mapping.get(key, ""))


def token_from_properties_file(path: str | Path, key: str = TOKEN_PROPERTY) -> str:
	"""Read the token from a Java-style properties file."""
	return token_from_mapping(read_properties(path), key)


def token_from_env(name: str = TOKEN_ENV_VAR) -> str:
	"""Read the token from an environment variable; empty when unset."""
	return token_from_literal(os.environ.get(name, ""))


def resolve_token(
	token: str | None = None,
	properties: str | Path | None = None,
) -> str:
	"""
	Pick a token from the first available source:
	an explicit token, then a properties file (when it exists),
	then the PINBOARD_API_TOKEN environment variable.
	"""
	if token:
		return token_from_literal(token)

	p = Path(properties) if properties is not None else DEFAULT_PROPERTIES_FILE
	if p.exists():
		return token_from_properties_file(p)

	return token_from_env()


def read_properties(path: str | Path) -> Dict[str, str]:
	"""
	Parse a properties file of `key=value` or `key: value` lines.
	Lines starting with '#' or '!' are comments.
	"""
	p = Path(path)
	if not p.exists():
		raise FileNotFoundError(f"Properties file not found: {p}")

	props: Dict[str, str] = {}
	with p.open("r", encoding="utf-8") as f:
		for line in f:
			line = line.strip()
			if not line or line[0] in "#!":
				continue
			seps = [i for i in (line.find("="), line.find(":")) if i >= 0]
			if not seps:
				props[line] = ""
				continue
			idx = min(seps)
			props[line[:idx].strip()] = line[idx + 1:].strip()
	return props


###############################################################################
# Loader
###############################################################################

def load_config(path: str | Path) -> ClientConfig:
	"""
	Read a YAML configuration file and return a populated ClientConfig.

	Recognized keys: api_token, properties_file, api_endpoint, timeout.
	When api_token is absent the token is resolved from the properties file
	(relative paths are taken relative to the config file) or the environment.
	"""
	p = Path(path)
	if not p.exists():
		raise FileNotFoundError(f"Config file not found: {p}")

	with p.open("r", encoding="utf-8") as f:
		raw = yaml.safe_load(f) or {}

	if not isinstance(raw, dict):
		raise ValueError(f"Config file must contain a mapping: {p}")

	properties = raw.get("properties_file")
	if properties is not None:
		properties = Path(properties)
		if not properties.is_absolute():
			properties = p.parent / properties

	token = raw.get("api_token")
	if token is not None and not isinstance(token, str):
		raise ValueError("api_token must be a string")

	cfg = ClientConfig(
		api_token=resolve_token(token, properties),
	)

	if "api_endpoint" in raw:
		endpoint = raw["api_endpoint"]
		if not isinstance(endpoint, str):
			raise ValueError("api_endpoint must be a string")
		cfg.api_endpoint = endpoint

	if "timeout" in raw:
		cfg.timeout_seconds = _parse_timeout(raw["timeout"])

	return cfg
