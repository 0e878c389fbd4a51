"""PII redaction over arbitrarily nested structured data. Pure: no I/O, no shared state."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple

from secure_inquiry.security.exceptions import RedactionConfigError

logger = logging.getLogger(__name__)

MARKER_TEMPLATE = "<REDACTED: {category}>"


@dataclass(frozen=True)
class RedactionMatcher:
    """One PII category and the pattern that recognizes it."""

    category: str
    pattern: "re.Pattern[str]"

    @classmethod
    def from_regex(cls, category: str, regex: str) -> "RedactionMatcher":
        try:
            compiled = re.compile(regex, re.ASCII)
        except re.error as e:
            raise RedactionConfigError(f"Invalid pattern for category '{category}': {e}") from e
        return cls(category=category, pattern=compiled)

    @property
    def marker(self) -> str:
        return MARKER_TEMPLATE.format(category=self.category)

    def apply(self, text: str) -> str:
        marker = self.marker
        return self.pattern.sub(lambda _match: marker, text)


EMAIL_MATCHER = RedactionMatcher.from_regex(
    "emails", r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"
)
# 13-19 digits, optionally separated by spaces or dashes.
CREDIT_CARD_MATCHER = RedactionMatcher.from_regex("credit cards", r"\b(?:\d[ -]*?){13,19}\b")
# 9 digits, dashes optional.
SSN_MATCHER = RedactionMatcher.from_regex("SSNs", r"\b\d{3}-?\d{2}-?\d{4}\b")

# Order matters: card numbers must be consumed before the shorter SSN pattern sees them.
DEFAULT_MATCHERS: Tuple[RedactionMatcher, ...] = (
    EMAIL_MATCHER,
    CREDIT_CARD_MATCHER,
    SSN_MATCHER,
)


def matchers_from_config(extra_patterns: Mapping[str, str]) -> Tuple[RedactionMatcher, ...]:
    """Built-in matchers followed by configured {category: regex} matchers, in mapping order."""
    extra = tuple(
        RedactionMatcher.from_regex(category, regex)
        for category, regex in extra_patterns.items()
    )
    return DEFAULT_MATCHERS + extra


def _verify_markers(matchers: Sequence[RedactionMatcher]) -> None:
    """No matcher may match any marker, otherwise redaction would not be idempotent."""
    markers = [m.marker for m in matchers]
    for matcher in matchers:
        for marker in markers:
            if matcher.pattern.search(marker):
                raise RedactionConfigError(
                    f"Matcher '{matcher.category}' matches redaction marker '{marker}'"
                )


class Redactor:
    """
    Replaces PII in every text leaf of a structure with <REDACTED: category>.
    Mappings are rebuilt as plain dicts, lists/tuples keep their type and length,
    other leaves are returned unchanged.
    """

    def __init__(self, matchers: Sequence[RedactionMatcher] = DEFAULT_MATCHERS) -> None:
        self._matchers = tuple(matchers)
        _verify_markers(self._matchers)

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(m.category for m in self._matchers)

    def redact_text(self, text: str) -> str:
        """Apply matchers in order to one string."""
        for matcher in self._matchers:
            text = matcher.apply(text)
        return text

    def redact(self, value: Any) -> Any:
        """Return a redacted copy of value; the input is never mutated."""
        if isinstance(value, str):
            try:
                return self.redact_text(value)
            except Exception:
                logger.warning(
                    "redaction_leaf_failed",
                    extra={"leaf_type": type(value).__name__},
                )
                return value
        if isinstance(value, Mapping):
            return {key: self.redact(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self.redact(item) for item in value]
        if isinstance(value, tuple):
            return tuple(self.redact(item) for item in value)
        return value


_default_redactor = Redactor()


def redact(value: Any) -> Any:
    """Redact with the built-in matcher set."""
    return _default_redactor.redact(value)


def redact_text(text: str) -> str:
    return _default_redactor.redact_text(text)
