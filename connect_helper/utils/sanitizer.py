"""
Sanitization of untrusted payloads before they are logged or sent back out.

Strings go through a pluggable text sanitizer. Containers are cleaned
recursively with their keys left untouched. Anything else collapses to an
empty string.
"""

import re
from typing import Any, Callable, Mapping, Optional

TextSanitize = Callable[[str], str]

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE_RE = re.compile(r"[\r\n\t ]+")


def sanitize_text_field(text: str) -> str:
    """
    Clean a single line of untrusted text.

    Removes script/style blocks and tags, escapes any stray ``<``, drops
    control characters and percent-encoded octets, then collapses runs of
    whitespace into one space and trims the result. Applying it twice gives
    the same result as applying it once.
    """
    filtered = _SCRIPT_STYLE_RE.sub("", text)
    filtered = _TAG_RE.sub("", filtered)
    filtered = filtered.replace("<", "&lt;")
    filtered = _CONTROL_RE.sub("", filtered)

    # Removing one octet can expose another, e.g. "%%4141"
    while _OCTET_RE.search(filtered):
        filtered = _OCTET_RE.sub("", filtered)

    return _WHITESPACE_RE.sub(" ", filtered).strip()


def _to_text(value: Any) -> str:
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


class Sanitizer:
    """Recursive cleaner for strings, mappings and lists."""

    def __init__(self, text_sanitize: Optional[TextSanitize] = None):
        self.text_sanitize = text_sanitize or sanitize_text_field

    def clean(self, value: Any) -> Any:
        """
        Clean an untrusted value.

        Args:
            value: String, mapping, list, or anything else

        Returns:
            The value unchanged when empty, a sanitized string, a cleaned
            copy of the container, or ``""`` for unsupported types
        """
        if not value:
            return value

        if isinstance(value, Mapping):
            return {key: self._clean_item(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._clean_item(item) for item in value]
        if isinstance(value, str):
            return self.text_sanitize(value)

        return ""

    def _clean_item(self, item: Any) -> Any:
        if isinstance(item, (Mapping, list, tuple)):
            return self.clean(item)
        return self.text_sanitize(_to_text(item))


_default_sanitizer = Sanitizer()


def sanitize_data(value: Any) -> Any:
    """Clean a value with the default text sanitizer."""
    return _default_sanitizer.clean(value)
