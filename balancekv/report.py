"""Per-client log of the request counters a backend has seen."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

REPORT_MAX_LEN = 100

_log = logging.getLogger(__name__)


class Report(dict):
    """Maps an author to the most recent request counters it sent."""

    def process(self, headers: Mapping[str, str]) -> None:
        """Record the ``lb-req-cnt`` header under the ``lb-author`` header."""
        lowered = {key.lower(): value for key, value in headers.items()}
        author = lowered.get("lb-author", "")
        counter = lowered.get("lb-req-cnt", "")
        _log.info("GET some-data from [%s] request [%s]", author, counter)
        if author:
            self[author] = [*self.get(author, []), counter][-REPORT_MAX_LEN:]

    def to_json(self) -> str:
        """Serialize the report as a JSON object followed by a newline."""
        return json.dumps(dict(self), ensure_ascii=False, separators=(",", ":")) + "\n"