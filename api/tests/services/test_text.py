"""
Tests for slug, excerpt and revalidation helpers.
"""

from xxml_cms.services.cache import PathRevalidator
from xxml_cms.services.text import derive_excerpt, slugify, timestamped_slug


class TestSlugify:
    def test_lowercases_and_hyphenates(self):
        assert slugify("Hello, World!") == "hello-world"

    def test_collapses_runs_and_trims_edges(self):
        assert slugify("  --Ownership &  Borrowing--  ") == "ownership-borrowing"

    def test_keeps_digits(self):
        assert slugify("XXML 2.0 Released") == "xxml-2-0-released"

    def test_title_without_alphanumerics_falls_back(self):
        assert slugify("!!!") == "post"


class TestTimestampedSlug:
    def test_appends_epoch_milliseconds(self, frozen_time):
        with frozen_time("2026-01-01 00:00:00"):
            assert timestamped_slug("hello-world") == "hello-world-1767225600000"

    def test_counter_follows_timestamp(self, frozen_time):
        with frozen_time("2026-01-01 00:00:00"):
            assert timestamped_slug("hello-world", 2) == "hello-world-1767225600000-2"


class TestDeriveExcerpt:
    def test_short_body_is_used_whole(self):
        body = "x" * 200
        assert derive_excerpt(body) == body

    def test_long_body_is_truncated_with_ellipsis(self):
        body = "y" * 201
        assert derive_excerpt(body) == "y" * 200 + "..."

    def test_explicit_excerpt_wins(self):
        assert derive_excerpt("z" * 500, "Custom summary") == "Custom summary"

    def test_empty_excerpt_falls_back_to_body(self):
        assert derive_excerpt("short body", "") == "short body"


class TestPathRevalidator:
    def test_records_each_path_once(self):
        revalidator = PathRevalidator()
        revalidator.revalidate("/forum")
        revalidator.revalidate("/forum")
        revalidator.revalidate("/blog")
        assert revalidator.stale_paths == ["/forum", "/blog"]

    def test_drain_empties(self):
        revalidator = PathRevalidator()
        revalidator.revalidate("/docs/standard-library")
        assert revalidator.drain() == ["/docs/standard-library"]
        assert revalidator.stale_paths == []
