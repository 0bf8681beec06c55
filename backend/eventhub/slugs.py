# backend/eventhub/slugs.py
"""URL slug derivation for event titles."""

import re

# ASCII word characters only, so accented letters are dropped rather than kept.
_STRIP_RE = re.compile(r"[^\w\s-]", re.ASCII)
_SPACE_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-+")


def generate_slug(title: str) -> str:
    """
    Turn a title into a lowercase, hyphen-delimited slug.

    >>> generate_slug("Tech Conf 2024!! — Keynote")
    'tech-conf-2024-keynote'

    Titles made only of punctuation give an empty string.
    """
    s = title.lower().strip()
    s = _STRIP_RE.sub("", s)
    s = _SPACE_RE.sub("-", s)
    s = _DASHES_RE.sub("-", s)
    return s.strip("-")
