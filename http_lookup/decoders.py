"""Response body decoders."""

import json
from typing import Any, Protocol


class ResponseDecoder(Protocol):
    def decode(self, body: bytes) -> Any | None:
        """Return the decoded record, or None when the body holds no record."""
        ...


class JsonResponseDecoder:
    """Decode a JSON body; a JSON ``null`` yields no record."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def decode(self, body: bytes) -> Any | None:
        return json.loads(body.decode(self._encoding))
