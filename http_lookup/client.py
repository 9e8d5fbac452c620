"""
Polling client that performs one HTTP GET per lookup key.

``HttpPollingClient.pull`` is the only method a host needs: it builds the
request, sends it, classifies the response and decodes the body. Every failure
ends up as ``None`` plus a log record; ``lookup`` exposes the same flow as a
tagged ``LookupResult`` for callers that need to tell "not found" from
"failed".
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import httpx

from http_lookup.decoders import ResponseDecoder
from http_lookup.headers import (
    HeaderPreprocessor,
    create_header_preprocessor,
    prepare_header_map,
    to_header_pairs,
)
from http_lookup.http_client import create_lookup_transport
from http_lookup.query import GetQueryCreator, LookupArg, LookupQueryCreator
from http_lookup.settings import (
    ConfigurationError,
    DEFAULT_TIMEOUT_SECONDS,
    ERROR_CODES_PREFIX,
    HEADER_PREFIX,
    SUCCESS_CODES_PREFIX,
    Settings,
)
from http_lookup.status import ComposeHttpStatusCodeChecker
from http_lookup.uri import MalformedURIError, build_uri

logger = logging.getLogger(__name__)

_BODY_SNIPPET_LIMIT = 512


class LookupStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class LookupResult:
    """Outcome of a single lookup."""

    status: LookupStatus
    record: Any | None = None
    reason: str | None = None

    @classmethod
    def found(cls, record: Any) -> "LookupResult":
        return cls(LookupStatus.FOUND, record=record)

    @classmethod
    def not_found(cls, reason: str | None = None) -> "LookupResult":
        return cls(LookupStatus.NOT_FOUND, reason=reason)

    @classmethod
    def failed(cls, reason: str) -> "LookupResult":
        return cls(LookupStatus.FAILED, reason=reason)


def _snippet(text: str) -> str:
    cleaned = text.strip()
    if len(cleaned) > _BODY_SNIPPET_LIMIT:
        return f"{cleaned[:_BODY_SNIPPET_LIMIT]}..."
    return cleaned


class HttpPollingClient:
    """Lookup client backed by a shared synchronous httpx.Client."""

    def __init__(
        self,
        client: httpx.Client,
        decoder: ResponseDecoder,
        url_template: str,
        *,
        properties: Mapping[str, str] | None = None,
        query_creator: LookupQueryCreator | None = None,
        header_preprocessor: HeaderPreprocessor | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        properties = dict(properties or {})
        self._client = client
        self._decoder = decoder
        self._url_template = url_template
        self._timeout = timeout
        self._query_creator = query_creator or GetQueryCreator(url_template)

        header_map = prepare_header_map(
            HEADER_PREFIX,
            properties,
            header_preprocessor or create_header_preprocessor(),
        )
        self._headers_and_values = to_header_pairs(header_map)
        try:
            self._headers = httpx.Headers(list(self._headers_and_values))
        except UnicodeEncodeError as exc:
            raise ConfigurationError(f"Request headers must be ASCII encodable: {exc!s}") from exc

        self._status_code_checker = ComposeHttpStatusCodeChecker(
            properties,
            white_list_prefix=SUCCESS_CODES_PREFIX,
            error_code_prefix=ERROR_CODES_PREFIX,
        )

    @classmethod
    def from_settings(cls, settings: Settings, decoder: ResponseDecoder) -> "HttpPollingClient":
        """Factory that builds the client and its transport from Settings."""
        return cls(
            create_lookup_transport(settings),
            decoder,
            settings.url,
            properties=settings.properties,
            timeout=settings.timeout,
        )

    @property
    def headers_and_values(self) -> tuple[tuple[str, str], ...]:
        """Resolved request headers, exposed for verification."""
        return self._headers_and_values

    def close(self) -> None:
        """Close the underlying HTTP resources."""
        self._client.close()

    def __enter__(self) -> "HttpPollingClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def pull(self, lookup_args: Sequence[LookupArg]) -> Any | None:
        """Return the decoded record for lookup_args, or None."""
        return self.lookup(lookup_args).record

    def lookup(self, lookup_args: Sequence[LookupArg]) -> LookupResult:
        """Perform the lookup and report how it ended. Never raises."""
        try:
            return self._query_and_process(lookup_args)
        except MalformedURIError as exc:
            logger.error("Unable to build lookup request URI: %s", exc, exc_info=exc)
            return LookupResult.failed(f"malformed URI: {exc!s}")
        except httpx.TimeoutException as exc:
            logger.error(
                "Lookup request timed out.",
                extra={"url": self._request_url(exc)},
                exc_info=exc,
            )
            return LookupResult.failed(f"request timed out: {exc!s}")
        except httpx.RequestError as exc:
            logger.error(
                "Lookup request failed: %s",
                exc,
                extra={"url": self._request_url(exc)},
                exc_info=exc,
            )
            return LookupResult.failed(f"request failed: {exc!s}")
        except Exception as exc:  # noqa: BLE001
            logger.exception("Exception during HTTP lookup request.")
            return LookupResult.failed(f"unexpected error: {exc!s}")

    # TODO: add a retry policy; a single attempt is made per lookup.
    def _query_and_process(self, lookup_args: Sequence[LookupArg]) -> LookupResult:
        request = self._build_http_request(lookup_args)
        logger.debug("Sending lookup request", extra={"url": str(request.url)})
        response = self._client.send(request)
        return self._process_http_response(response, request)

    def _build_http_request(self, lookup_args: Sequence[LookupArg]) -> httpx.Request:
        query_info = self._query_creator.create_lookup_query(lookup_args)
        url = build_uri(self._url_template, query_info.path_params, query_info.query_string)

        if self._headers:
            return self._client.build_request("GET", url, headers=self._headers, timeout=self._timeout)
        return self._client.build_request("GET", url, timeout=self._timeout)

    def _process_http_response(
        self,
        response: httpx.Response | None,
        request: httpx.Request,
    ) -> LookupResult:
        if response is None:
            logger.warning("Null HTTP response for request %s", request.url)
            return LookupResult.failed("no response")

        status_code = response.status_code
        body = response.text
        logger.debug("Received %s status code for lookup request", status_code)

        is_error_code = self._status_code_checker.is_error_code(status_code)
        if not body.strip() or is_error_code:
            logger.warning(
                "Returned HTTP status code was invalid or returned body was empty. "
                "Status code [%s], response body [%s]",
                status_code,
                _snippet(body),
                extra={"url": str(request.url), "status_code": status_code},
            )
            if is_error_code:
                return LookupResult.failed(f"error status code {status_code}")
            return LookupResult.not_found("empty response body")

        try:
            record = self._decoder.decode(response.content)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Unable to decode lookup response body [%s]",
                _snippet(body),
                extra={"url": str(request.url), "status_code": status_code},
                exc_info=exc,
            )
            return LookupResult.failed(f"decode failure: {exc!s}")
        if record is None:
            return LookupResult.not_found("decoder produced no record")
        return LookupResult.found(record)

    @staticmethod
    def _request_url(exc: httpx.RequestError) -> str | None:
        try:
            return str(exc.request.url)
        except RuntimeError:
            return None
