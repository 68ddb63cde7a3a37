"""Tests for link and front matter processor factories."""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from obsidian_to_hugo.core.models import ConvertContext, FrontMatter, NoteFile
from obsidian_to_hugo.transforms import default_content_processors, default_frontmatter_processors
from obsidian_to_hugo.transforms.links import heading_anchor, hugo_ref, rewrite_wikilinks, wikilinks
from obsidian_to_hugo.transforms.frontmatter import (
    fallback_date,
    fallback_slug,
    fallback_title,
    format_timestamp,
    slugify,
)


class TestLinkTransforms:
    """Tests for wikilink rewriting."""

    def test_hugo_ref(self):
        link = hugo_ref()
        assert link("My Note", "my-note") == '[My Note]({{< ref "my-note" >}})'

    def test_simple_wikilink(self):
        result = rewrite_wikilinks("See [[Page]].")
        assert result == 'See [Page]({{< ref "Page" >}}).'

    def test_wikilink_with_spaces_keeps_target(self):
        result = rewrite_wikilinks("See [[Other Note]]")
        assert result == 'See [Other Note]({{< ref "Other Note" >}})'

    def test_heading_link(self):
        result = rewrite_wikilinks("[[Page#Some Heading]]")
        assert result == '[Page]({{< ref "Page#some-heading" >}})'

    def test_only_first_hash_splits_heading(self):
        result = rewrite_wikilinks("[[Page#Part A#Sub]]")
        assert result == '[Page]({{< ref "Page#part-a#sub" >}})'

    def test_multiple_links_on_one_line(self):
        result = rewrite_wikilinks("[[One]] and [[Two#Intro]]")
        assert '[One]({{< ref "One" >}})' in result
        assert '[Two]({{< ref "Two#intro" >}})' in result

    def test_link_does_not_span_lines(self):
        text = "[[Broken\nlink]] and [[Fine]]"
        result = rewrite_wikilinks(text)
        assert result.startswith("[[Broken\nlink]]")
        assert '[Fine]({{< ref "Fine" >}})' in result

    def test_non_greedy_match(self):
        result = rewrite_wikilinks("[[A]] text ]] [[B]]")
        assert result == '[A]({{< ref "A" >}}) text ]] [B]({{< ref "B" >}})'

    def test_text_without_links_unchanged(self):
        text = "No links here, just [markdown](link.md)."
        assert rewrite_wikilinks(text) == text

    def test_custom_link_format(self):
        result = rewrite_wikilinks("[[Page#Top]]", lambda text, target: f"<{text}|{target}>")
        assert result == "<Page|Page#top>"

    def test_heading_anchor(self):
        assert heading_anchor("Some Heading") == "some-heading"

    def test_wikilinks_processor(self, tmp_path):
        context = ConvertContext(vault_dir=tmp_path, output_dir=tmp_path / "out")
        file = NoteFile(source_path=tmp_path / "a.md", dest_path=tmp_path / "out" / "a.md")
        process = wikilinks()
        assert process(context, file, "[[B]]") == '[B]({{< ref "B" >}})'


class TestSlugify:
    """Tests for slug derivation."""

    def test_punctuation_and_case(self):
        assert slugify("My Title!") == "my-title"

    def test_every_non_alphanumeric_replaced(self):
        assert slugify("a b_c.d") == "a-b-c-d"

    def test_runs_are_not_collapsed(self):
        assert slugify("a  b") == "a--b"

    def test_non_ascii_replaced(self):
        assert slugify("Café") == "caf"

    def test_all_punctuation_never_empty(self):
        assert slugify("!!") == "--"


class TestFrontmatterTransforms:
    """Tests for front matter fallback processors."""

    @pytest.fixture
    def note(self, tmp_path):
        path = tmp_path / "Note#1.md"
        path.write_text("body")
        return NoteFile(source_path=path, dest_path=tmp_path / "out" / "Note#1.md")

    @pytest.fixture
    def context(self, tmp_path):
        return ConvertContext(vault_dir=tmp_path, output_dir=tmp_path / "out")

    def test_fallback_title_from_file_name(self, context, note):
        fm = FrontMatter()
        fallback_title()(context, note, fm)
        assert fm.title == "Note1"

    def test_fallback_title_keeps_existing(self, context, note):
        fm = FrontMatter(title="Kept")
        fallback_title()(context, note, fm)
        assert fm.title == "Kept"

    def test_fallback_slug_from_title(self, context, note):
        fm = FrontMatter(title="My Title!")
        fallback_slug()(context, note, fm)
        assert fm.slug == "my-title"

    def test_fallback_slug_keeps_existing(self, context, note):
        fm = FrontMatter(title="My Title", slug="custom")
        fallback_slug()(context, note, fm)
        assert fm.slug == "custom"

    def test_fallback_date_keeps_existing(self, context, note):
        fm = FrontMatter(date="2024-01-01")
        fallback_date()(context, note, fm)
        assert fm.date == "2024-01-01"

    def test_fallback_date_uses_timestamp_lookup(self, tmp_path, note):
        moment = datetime(2023, 5, 6, 7, 8, 9, tzinfo=timezone(timedelta(hours=2)))
        context = ConvertContext(
            vault_dir=tmp_path,
            output_dir=tmp_path / "out",
            timestamp_lookup=lambda path: moment,
        )
        fm = FrontMatter()
        fallback_date()(context, note, fm)
        assert datetime.fromisoformat(fm.date) == moment

    def test_fallback_date_uses_mtime_when_lookup_returns_none(self, tmp_path, note):
        mtime = datetime(2022, 1, 2, 3, 4, 5).timestamp()
        os.utime(note.source_path, (mtime, mtime))
        context = ConvertContext(
            vault_dir=tmp_path,
            output_dir=tmp_path / "out",
            timestamp_lookup=lambda path: None,
        )
        fm = FrontMatter()
        fallback_date()(context, note, fm)
        assert datetime.fromisoformat(fm.date).timestamp() == mtime

    def test_fallback_date_ignores_failing_lookup(self, tmp_path, note):
        def broken_lookup(path: Path):
            raise RuntimeError("git exploded")

        mtime = datetime(2022, 1, 2, 3, 4, 5).timestamp()
        os.utime(note.source_path, (mtime, mtime))
        context = ConvertContext(
            vault_dir=tmp_path,
            output_dir=tmp_path / "out",
            timestamp_lookup=broken_lookup,
        )
        fm = FrontMatter()
        fallback_date()(context, note, fm)
        assert datetime.fromisoformat(fm.date).timestamp() == mtime

    def test_fallback_date_uses_now_for_missing_file(self, context, tmp_path):
        note = NoteFile(source_path=tmp_path / "gone.md", dest_path=tmp_path / "out" / "gone.md")
        before = datetime.now().astimezone().replace(microsecond=0)
        fm = FrontMatter()
        fallback_date()(context, note, fm)
        assert datetime.fromisoformat(fm.date) >= before

    def test_format_timestamp_has_offset(self):
        formatted = format_timestamp(datetime(2024, 3, 1, 12, 0, 0))
        assert datetime.fromisoformat(formatted).utcoffset() is not None

    def test_default_chain_order(self, context, note):
        fm = FrontMatter()
        for process in default_frontmatter_processors():
            process(context, note, fm)
        assert fm.title == "Note1"
        assert fm.slug == "note1"
        assert fm.date

    def test_default_content_processors(self, context, note):
        body = "[[X]]"
        for process in default_content_processors():
            body = process(context, note, body)
        assert body == '[X]({{< ref "X" >}})'
