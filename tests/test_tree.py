import pytest

from nfobridge.core.tree import (
    attr,
    children,
    find_root,
    own_text,
    parse_document,
    parse_fragment,
    serialize_fragment,
    single_child,
    whole_text,
)
from nfobridge.utils.exceptions import NFOParseError


def test_child_queries_ignore_case():
    root = parse_document("<movie><TmdbId>603</TmdbId><genre>A</genre><genre>B</genre></movie>")
    assert own_text(single_child(root, "tmdbid")) == "603"
    assert len(children(root, "GENRE")) == 2
    # several matches are not a single child
    assert single_child(root, "genre") is None
    assert single_child(None, "genre") is None


def test_own_text_excludes_descendant_text():
    root = parse_document("<set>Outer <name>Inner</name> tail</set>")
    assert own_text(root) == "Outer tail"
    assert whole_text(root) == "Outer Inner tail"


def test_attr_defaults_to_empty():
    root = parse_document('<thumb aspect="poster">x</thumb>')
    assert attr(root, "aspect") == "poster"
    assert attr(root, "missing") == ""


def test_fragment_serialization_drops_tail_and_layout():
    root = parse_document("<movie>\n  <custom a=\"1\">\n    <x>1</x>\n  </custom>\n  <title>T</title>\n</movie>")
    fragment = serialize_fragment(single_child(root, "custom"))
    assert fragment == '<custom a="1"><x>1</x></custom>'
    assert parse_fragment(fragment).get("a") == "1"


def test_parse_document_accepts_declaration_and_bom():
    raw = '\ufeff<?xml version="1.0" encoding="UTF-8"?>\n<movie><title>T</title></movie>'
    assert own_text(single_child(parse_document(raw), "title")) == "T"
    raw_bytes = b'\xef\xbb\xbf<?xml version="1.0" encoding="UTF-8"?><movie><title>T</title></movie>'
    assert own_text(single_child(parse_document(raw_bytes), "title")) == "T"


def test_parse_document_repairs_trailing_url():
    raw = "<movie><title>Heat</title></movie>\nhttps://www.imdb.com/title/tt0113277/"
    assert own_text(single_child(parse_document(raw), "title")) == "Heat"


def test_parse_document_repairs_stray_ampersand():
    root = parse_document("<movie><title>Tom & Jerry</title><studio>A &amp; B</studio></movie>")
    assert own_text(single_child(root, "title")) == "Tom & Jerry"
    assert own_text(single_child(root, "studio")) == "A & B"


def test_parse_document_raises_for_non_xml():
    with pytest.raises(NFOParseError) as excinfo:
        parse_document("this is not xml at all", "garbage.nfo")
    assert "garbage.nfo" in excinfo.value.message


def test_find_root_descends_into_wrappers():
    document = parse_document("<root><meta/><movie><title>T</title></movie></root>")
    assert find_root(document).tag == "movie"
    assert find_root(parse_document("<other/>")) is None


def test_fragment_keeps_namespace_prefix():
    root = parse_document('<movie><title>x</title><ext:foo xmlns:ext="urn:x">1</ext:foo></movie>')
    fragment = serialize_fragment(children(root)[1])
    assert fragment == '<ext:foo xmlns:ext="urn:x">1</ext:foo>'
    assert serialize_fragment(parse_fragment(fragment)) == fragment


def test_fragment_keeps_comments_and_processing_instructions():
    root = parse_document("<movie><custom><!-- keep me --><?app hint?><a>1</a></custom></movie>")
    fragment = serialize_fragment(single_child(root, "custom"))
    assert fragment == "<custom><!-- keep me --><?app hint?><a>1</a></custom>"


def test_comments_do_not_count_as_children_or_text():
    root = parse_document("<movie><!-- note --><plot>A<!-- x -->B</plot></movie>")
    assert len(children(root)) == 1
    plot = single_child(root, "plot")
    assert own_text(plot) == "AB"
    assert whole_text(plot) == "AB"
