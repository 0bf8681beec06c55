import pytest

from eventhub.slugs import generate_slug


def test_example_title():
    assert generate_slug("Tech Conf 2024!! — Keynote") == "tech-conf-2024-keynote"


@pytest.mark.parametrize("title,expected", [
    ("  Hello   World  ", "hello-world"),
    ("a -- b", "a-b"),
    ("-leading and trailing-", "leading-and-trailing"),
    ("Café Night", "caf-night"),
    ("snake_case title", "snake_case-title"),
    ("React & Next.js Summit", "react-nextjs-summit"),
])
def test_slug_shapes(title, expected):
    assert generate_slug(title) == expected


def test_punctuation_only_title_gives_empty_slug():
    assert generate_slug("!!! ??? ---") == ""


@pytest.mark.parametrize("title", [
    "Tech Conf 2024!! — Keynote",
    "PyData  Berlin / 2025",
    "already-a-slug",
])
def test_slug_is_deterministic_and_idempotent(title):
    slug = generate_slug(title)
    assert generate_slug(title) == slug
    assert generate_slug(slug) == slug
