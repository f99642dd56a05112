"""
Extraction Rules

Ordered (field-name, transform) rules per canonical attribute.

PRINCIPLES:
===========
1. Rules are evaluated in priority order; first non-empty value wins
2. Transforms are pure functions of the raw value
3. Parse with maximum tolerance: wrong types yield None, never raise
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple
from urllib.parse import urlsplit
import re

from .contracts import RawRecord


_WHITESPACE = re.compile(r"\s+")
_DEGREE_BADGE = re.compile(r"\s*•\s*\d+(?:st|nd|rd|th)\s*$", re.IGNORECASE)
_CONNECTED_ON = re.compile(r"^connected on\b", re.IGNORECASE)
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")

# "Software Engineer at Google", "Manager @ Microsoft"
_AT_COMPANY = re.compile(r"(?:\bat\s+|@\s*)([^,•|]+)", re.IGNORECASE)
# "Google • Software Engineer"
_BULLET_COMPANY = re.compile(r"^([^•]+?)\s*•")
_SCHOOL = re.compile(
    r"\b(?:university|college|institute|school)\s+of\s+([^,•|]+)",
    re.IGNORECASE
)
_ROLE = re.compile(r"^([^@•]+?)(?:\s+at\s+|\s*@|\s*•)", re.IGNORECASE)

_LOCATION_KEYWORDS = (
    "canada", "united states", "usa", "uk", "england", "scotland", "ireland",
    "ontario", "quebec", "bc", "british columbia", "alberta",
    "california", "new york", "texas", "florida", "toronto", "vancouver",
    "london", "montreal", "waterloo", "boston", "san francisco", "nyc",
    "bay area",
)


# =============================================================================
# TRANSFORMS
# =============================================================================

def clean_text(value: Any) -> Optional[str]:
    """Collapse whitespace; anything that is not a non-blank string is None."""
    if not isinstance(value, str):
        return None
    text = _WHITESPACE.sub(" ", value).strip()
    return text or None


def clean_name(value: Any) -> Optional[str]:
    """Clean a display name and drop a trailing degree badge ("• 2nd")."""
    text = clean_text(value)
    if text is None:
        return None
    return _DEGREE_BADGE.sub("", text).strip() or None


def clean_description(value: Any) -> Optional[str]:
    text = clean_text(value)
    if text is None or _CONNECTED_ON.match(text):
        return None
    return text


def _match_group(pattern: re.Pattern, value: Any) -> Optional[str]:
    text = clean_description(value)
    if text is None:
        return None
    match = pattern.search(text)
    if not match:
        return None
    return clean_text(match.group(1))


def company_from_description(value: Any) -> Optional[str]:
    return _match_group(_AT_COMPANY, value) or _match_group(_BULLET_COMPANY, value)


def school_from_description(value: Any) -> Optional[str]:
    return _match_group(_SCHOOL, value)


def role_from_description(value: Any) -> Optional[str]:
    return _match_group(_ROLE, value)


def school_from_education(value: Any) -> Optional[str]:
    """First education entry; entries may be dicts with a `school` key or strings."""
    if not isinstance(value, (list, tuple)) or not value:
        return None
    first = value[0]
    if isinstance(first, dict):
        return clean_text(first.get('school'))
    return clean_text(first)


def name_from_parts(record: RawRecord) -> Optional[str]:
    first = clean_text(record.get('first_name')) or ""
    last = clean_text(record.get('last_name')) or ""
    return clean_name(f"{first} {last}")


def is_likely_location(value: Any) -> bool:
    text = clean_text(value)
    if text is None or len(text) > 60:
        return False
    if "," in text and len(text.split()) <= 8:
        return True
    low = text.lower()
    return any(k in low for k in _LOCATION_KEYWORDS)


def location_field(value: Any) -> Optional[str]:
    return clean_text(value) if is_likely_location(value) else None


# =============================================================================
# RULE PIPELINE
# =============================================================================

@dataclass(frozen=True)
class FieldRule:
    """
    One extraction step.

    `field_name` selects the raw value handed to `transform`;
    None hands over the whole record.
    """
    field_name: Optional[str]
    transform: Callable[[Any], Optional[str]]

    def apply(self, record: RawRecord) -> Optional[str]:
        raw = record if self.field_name is None else record.get(self.field_name)
        return self.transform(raw)


@dataclass(frozen=True)
class AttributeExtractor:
    """Evaluates rules in order; falls back to `default`."""
    attribute: str
    rules: Tuple[FieldRule, ...]
    default: Optional[str] = None

    def extract(self, record: RawRecord) -> Optional[str]:
        for rule in self.rules:
            value = rule.apply(record)
            if value:
                return value
        return self.default


def build_extractors(unknown: str) -> Tuple[AttributeExtractor, ...]:
    """Canonical attribute extractors in precedence order."""
    return (
        AttributeExtractor('name', (
            FieldRule('full_name', clean_name),
            FieldRule('name', clean_name),
            FieldRule(None, name_from_parts),
        ), default=unknown),
        AttributeExtractor('company', (
            FieldRule('current_company', clean_text),
            FieldRule('company', clean_text),
            FieldRule('description', company_from_description),
        ), default=unknown),
        AttributeExtractor('school', (
            FieldRule('education', school_from_education),
            FieldRule('description', school_from_description),
        ), default=unknown),
        AttributeExtractor('role', (
            FieldRule('current_title', clean_text),
            FieldRule('title', clean_text),
            FieldRule('description', role_from_description),
        ), default=unknown),
        AttributeExtractor('description', (
            FieldRule('description', clean_description),
        ), default=""),
        AttributeExtractor('profile_picture_url', (
            FieldRule('profile_picture_url', clean_text),
            FieldRule('profile_pic', clean_text),
            FieldRule('img', clean_text),
        )),
        AttributeExtractor('profile_url', (
            FieldRule('profile_url', clean_text),
        )),
        AttributeExtractor('location', (
            FieldRule('location', location_field),
        )),
    )


# =============================================================================
# IDENTITY
# =============================================================================

def derive_base_id(record: RawRecord, index: int, length: int) -> Tuple[str, bool]:
    """
    Stable id from the profile URL's last path segment.

    Non-alphanumerics are stripped and the result truncated to `length`;
    records without a usable URL get "n<index>". The flag tells whether
    the id came from the URL.
    """
    url = clean_text(record.get('profile_url'))
    if url:
        try:
            path = urlsplit(url).path
        except ValueError:
            path = ""
        segments = [s for s in path.split('/') if s]
        if segments:
            slug = _NON_ALNUM.sub("", segments[-1])[:length]
            if slug:
                return slug, True
    return f"n{index}", False
