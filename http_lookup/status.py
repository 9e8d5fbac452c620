"""
HTTP status code classification for lookup responses.

Rules come from two property groups: an allow list (success codes) and an
error list. Each value is a comma separated list of rules, where a rule is an
exact code (``404``), an inclusive range (``500-504``) or a family wildcard
(``4XX``).
"""

import re
from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from http_lookup.settings import (
    ERROR_CODES_PREFIX,
    SUCCESS_CODES_PREFIX,
    ConfigurationError,
    properties_with_prefix,
)

MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599

_EXACT_PATTERN = re.compile(r"^\d{3}$")
_RANGE_PATTERN = re.compile(r"^(\d{3})\s*-\s*(\d{3})$")
_FAMILY_PATTERN = re.compile(r"^([1-5])XX$", re.IGNORECASE)


class StatusCodeRule(Protocol):
    def contains(self, status_code: int) -> bool:
        ...


@dataclass(frozen=True, slots=True)
class ExactStatusCode:
    code: int

    def contains(self, status_code: int) -> bool:
        return status_code == self.code


@dataclass(frozen=True, slots=True)
class StatusCodeRange:
    low: int
    high: int

    def contains(self, status_code: int) -> bool:
        return self.low <= status_code <= self.high


@dataclass(frozen=True, slots=True)
class StatusCodeFamily:
    """``dXX`` wildcard, e.g. family 4 covers 400-499."""

    leading_digit: int

    def contains(self, status_code: int) -> bool:
        return status_code // 100 == self.leading_digit


def _parse_code(raw: str, rule: str) -> int:
    code = int(raw)
    if not MIN_STATUS_CODE <= code <= MAX_STATUS_CODE:
        raise ConfigurationError(
            f"Status code rule '{rule}' is outside of {MIN_STATUS_CODE}-{MAX_STATUS_CODE}."
        )
    return code


def parse_status_rule(rule: str) -> StatusCodeRule:
    """Parse a single rule string into one of the rule variants."""
    cleaned = rule.strip()

    if _EXACT_PATTERN.match(cleaned):
        return ExactStatusCode(_parse_code(cleaned, rule))

    range_match = _RANGE_PATTERN.match(cleaned)
    if range_match:
        low = _parse_code(range_match.group(1), rule)
        high = _parse_code(range_match.group(2), rule)
        if low > high:
            raise ConfigurationError(f"Status code range '{rule}' has its bounds reversed.")
        return StatusCodeRange(low, high)

    family_match = _FAMILY_PATTERN.match(cleaned)
    if family_match:
        return StatusCodeFamily(int(family_match.group(1)))

    raise ConfigurationError(
        f"Unable to parse status code rule '{rule}'. "
        "Expected an exact code (404), a range (500-504) or a family (5XX)."
    )


def parse_status_rules(properties: Mapping[str, str], prefix: str) -> tuple[StatusCodeRule, ...]:
    """Collect every comma separated rule from the properties sharing prefix."""
    rules: list[StatusCodeRule] = []
    for _, value in properties_with_prefix(properties, prefix):
        for item in value.split(","):
            if item.strip():
                rules.append(parse_status_rule(item))
    return tuple(rules)


def _matches_any(rules: Sequence[StatusCodeRule], status_code: int) -> bool:
    return any(rule.contains(status_code) for rule in rules)


class ComposeHttpStatusCodeChecker:
    """
    Decide whether a response status should be treated as a failed lookup.

    The error list always wins. When an allow list is configured, anything
    outside of it is an error as well. Without an allow list only the error
    list produces errors.
    """

    def __init__(
        self,
        properties: Mapping[str, str],
        *,
        white_list_prefix: str = SUCCESS_CODES_PREFIX,
        error_code_prefix: str = ERROR_CODES_PREFIX,
    ) -> None:
        self._allow_list = parse_status_rules(properties, white_list_prefix)
        self._error_list = parse_status_rules(properties, error_code_prefix)

    def is_error_code(self, status_code: int) -> bool:
        if not MIN_STATUS_CODE <= status_code <= MAX_STATUS_CODE:
            return True
        if _matches_any(self._error_list, status_code):
            return True
        if self._allow_list:
            return not _matches_any(self._allow_list, status_code)
        return False
