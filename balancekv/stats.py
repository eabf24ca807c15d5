"""Collect and print the request reports of every backend."""

from __future__ import annotations

import argparse
import json
import logging
from urllib.error import HTTPError
from urllib.request import urlopen

SERVERS = ("localhost:8080", "localhost:8081", "localhost:8082")

_log = logging.getLogger(__name__)


def trim_report(report: dict[str, list[str] | None],
                limit: int = 5) -> dict[str, list[str] | None]:
    """Return a copy of the report keeping only the last ``limit`` entries per author."""
    return {author: None if entries is None else list(entries[max(len(entries) - limit, 0):])
            for author, entries in report.items()}


def _parse_report(raw: bytes) -> dict[str, list[str] | None] | None:
    try:
        payload, _ = json.JSONDecoder().raw_decode(raw.decode().lstrip())
    except ValueError:
        return None
    if not isinstance(payload, dict) or not all(
            entries is None or (isinstance(entries, list)
                                and all(isinstance(e, str) for e in entries))
            for entries in payload.values()):
        return None
    return payload


def main(argv: list[str] | None = None) -> int:
    """Fetch /report from every backend and log the trimmed results."""
    parser = argparse.ArgumentParser(description="Print backend request reports.")
    parser.add_argument("--https", action="store_true", help="whether backends support HTTPs")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    scheme = "https" if args.https else "http"

    for number, server in enumerate(SERVERS):
        data = None
        try:
            try:
                with urlopen(f"{scheme}://{server}/report", timeout=10.0) as resp:
                    raw = resp.read()
            except HTTPError as err:
                with err:
                    raw = err.read()
        except (OSError, ValueError) as exc:
            _log.info("error %s %s", server, exc)
        else:
            parsed = _parse_report(raw)
            if parsed is not None:
                data = trim_report(parsed)

        _log.info("=========================")
        _log.info("SERVER %d %s", number, server)
        _log.info("=========================")
        _log.info("%s", json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False))
    return 0