"""
Slug generation for article and author URLs.
"""

import re

from civicposts.shared.exceptions.domain_exceptions import DomainValidationError

MAX_SLUG_LENGTH = 200

_SPECIAL_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def _normalize(text: str) -> str:
    slug = (text or "").lower().strip()
    slug = _SPECIAL_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def generate_slug(title: str) -> str:
    """
    Build the article slug from its full title.

    Long titles are cut at MAX_SLUG_LENGTH characters without leaving a
    trailing hyphen.

    Raises:
        DomainValidationError: if the title has no usable characters
    """
    slug = _normalize(title)
    if len(slug) > MAX_SLUG_LENGTH:
        slug = slug[:MAX_SLUG_LENGTH].rstrip("-")
    if not slug:
        raise DomainValidationError(f"Cannot build a slug from title: {title!r}")
    return slug


def generate_author_slug(author_name: str) -> str:
    """Slug of the public author page; empty for an empty name."""
    return _normalize(author_name)
