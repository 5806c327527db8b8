from __future__ import annotations

from conftest import file, page

from mcp_site_explorer.models import SiteIndex
from mcp_site_explorer.search import haystack, normalize_query, search_items


def test_normalize_query() -> None:
    assert normalize_query("  InTro ") == "intro"
    assert normalize_query("") == ""
    assert normalize_query(None) == ""


def test_intro_matches_only_the_page() -> None:
    items = [
        page("Intro", "/content/guide/intro.html"),
        file("logo.png", "/content/assets/logo.png"),
    ]
    hits = search_items(items, "intro", "content")
    assert [hit.identifier for hit in hits] == ["Intro"]


def test_empty_query_matches_nothing(sample_index: SiteIndex) -> None:
    assert search_items(sample_index.items(), "", "content") == []
    assert search_items(sample_index.items(), "   ", "content") == []


def test_items_outside_root_are_not_candidates(sample_index: SiteIndex) -> None:
    assert search_items(sample_index.items(), "readme", "content") == []


def test_body_and_paths_are_searched(sample_index: SiteIndex) -> None:
    hits = search_items(sample_index.items(), "INTRO", "content")
    # "Setup" mentions the intro in its body; order follows the index.
    assert [hit.identifier for hit in hits] == ["Intro", "Setup"]

    hits = search_items(sample_index.items(), "assets/", "content")
    assert [hit.identifier for hit in hits] == ["logo.png"]


def test_match_is_a_contiguous_substring() -> None:
    items = [page("Getting started", "/content/a.html")]
    assert search_items(items, "getting started", "content")
    assert not search_items(items, "started getting", "content")


def test_results_are_capped_in_input_order() -> None:
    items = [page(f"Note {i}", f"/content/notes/{i}.html") for i in range(50)]
    hits = search_items(items, "note", "content", max_results=20)
    assert len(hits) == 20
    assert [hit.identifier for hit in hits] == [f"Note {i}" for i in range(20)]

    assert len(search_items(items, "note", "content")) == 40
    assert len(search_items(items[:3], "note", "content", max_results=20)) == 3


def test_root_marker_is_a_containment_check() -> None:
    relative = page("Relative", "content/rel.html")
    nested = page("Nested", "/site/content/nested.html")
    hits = search_items([relative, nested], "html", "content")
    assert [hit.identifier for hit in hits] == ["Relative", "Nested"]


def test_source_path_preferred_for_membership() -> None:
    item = page("Mirror", "/content/mirror.html", path="/drafts/mirror.md")
    assert search_items([item], "mirror", "content") == []


def test_missing_fields_do_not_break_haystack() -> None:
    item = file("", "", path="/content/x.bin")
    assert haystack(item) == "  /content/x.bin "
    assert search_items([item], "x.bin", "content") == [item]
