#!/usr/bin/env python3
import sys
import logging
import argparse

from config import load_config, resolve_token, ClientConfig
from api import APIFactory
from pinboard_poster import PinboardError
from util import parse_time


LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def parse_args(argv=None):
	"""
	Build and parse the CLI for the poster binary.

	Returns:
		argparse.Namespace describing config path, credential overrides,
		verbosity, and the selected `add` / `delete` command.
	"""
	p = argparse.ArgumentParser(
		prog="pinboard-poster",
		description="Add or delete Pinboard bookmarks"
	)

	p.add_argument(
		"--config",
		default=None,
		help="Path to YAML config file"
	)

	p.add_argument(
		"--token",
		default=None,
		help="API token (user:TOKEN); defaults to local.properties or $PINBOARD_API_TOKEN"
	)

	p.add_argument(
		"--endpoint",
		default=None,
		help="Override API end point"
	)

	p.add_argument(
		"-v", "--verbose",
		action="store_true",
		help="Trace HTTP requests and responses"
	)

	sub = p.add_subparsers(dest="command", required=True)

	add = sub.add_parser("add", help="Add a bookmark")
	add.add_argument("url", help="URL of the bookmark")
	add.add_argument("description", help="Title of the bookmark")
	add.add_argument("--extended", default="", help="Longer description")
	add.add_argument("--tags", nargs="*", default=[], help="Tags")
	add.add_argument("--dt", default=None, help="Creation time (ISO8601)")
	add.add_argument(
		"--no-replace",
		action="store_true",
		help="Do not replace an existing bookmark for the URL"
	)
	add.add_argument(
		"--private",
		action="store_true",
		help="Do not make the bookmark public"
	)
	add.add_argument(
		"--to-read",
		action="store_true",
		help="Mark the bookmark as unread"
	)

	delete = sub.add_parser("delete", help="Delete a bookmark")
	delete.add_argument("url", help="URL of the bookmark")

	return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> ClientConfig:
	"""
	Load the config file (if any) and apply CLI overrides.
	"""
	if args.config:
		config = load_config(args.config)
	else:
		config = ClientConfig(api_token=resolve_token(args.token))

	if args.token:
		config.api_token = args.token

	if args.endpoint:
		config.api_endpoint = args.endpoint

	return config


def run(args: argparse.Namespace, poster) -> bool:
	"""Execute the selected command against the given poster."""
	if args.command == "add":
		dt = parse_time(args.dt) if args.dt else None
		ok = poster.add_pin(
			args.url,
			args.description,
			extended=args.extended,
			tags=args.tags,
			dt=dt,
			replace=not args.no_replace,
			shared=not args.private,
			to_read=args.to_read,
		)
		if ok:
			print(f"[OK] Added: {args.url}")
		return ok

	ok = poster.delete_pin(args.url)
	if ok:
		print(f"[OK] Deleted: {args.url}")
	return ok


def main(argv=None):
	args = parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format=LOG_FORMAT,
	)

	try:
		config = build_config(args)
	except (OSError, ValueError, TypeError) as e:
		print(f"[ERROR] Failed to load config: {e}")
		sys.exit(1)

	with APIFactory.from_config(config) as poster:
		try:
			ok = run(args, poster)
		except (PinboardError, ValueError) as e:
			print(f"[ERROR] {e}")
			sys.exit(1)

	if not ok:
		print(f"[ERROR] Failed to {args.command}: {args.url}")
		sys.exit(1)


if __name__ == "__main__":
	main()
