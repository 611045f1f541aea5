"""Tests for comment stripping, masking and doc-comment collapsing."""

from traitdiff.extractors.comments import (
    Segment,
    collapse_doc_comments,
    iter_segments,
    mask_source,
    normalize_comments,
    strip_comments,
)


def test_mask_source_blanks_string_literal():
    masked = mask_source('let s = "{";')
    assert masked == "let s =    ;"


def test_mask_source_blanks_char_literal():
    assert mask_source("let c = '}';") == "let c =    ;"


def test_mask_source_keeps_lifetimes():
    source = "fn f<'a>(x: &'a str) {"
    assert mask_source(source) == source


def test_mask_source_preserves_length_and_newlines():
    source = "a /* {\n} */ b // {\nc"
    masked = mask_source(source)
    assert len(masked) == len(source)
    assert masked.count("\n") == 2
    assert "{" not in masked and "}" not in masked


def test_iter_segments_classifies_doc_comment():
    kinds = [kind for kind, _, _ in iter_segments("/// doc\n// note\ncode")]
    assert kinds == [
        Segment.DOC_COMMENT,
        Segment.CODE,
        Segment.LINE_COMMENT,
        Segment.CODE,
    ]


def test_strip_comments_truncates_line_comments_and_keeps_docs():
    lines = ["fn a(); // note", "/// doc", "x"]
    assert strip_comments(lines) == ["fn a();", "/// doc", "x"]


def test_four_slashes_is_a_plain_comment():
    kinds = [kind for kind, _, _ in iter_segments("//// ----\n/// doc")]
    assert kinds == [Segment.LINE_COMMENT, Segment.CODE, Segment.DOC_COMMENT]
    assert strip_comments(["    //// ----", "    /// doc", "    fn a();"]) == [
        "",
        "    /// doc",
        "    fn a();",
    ]
    assert collapse_doc_comments(["//// ----", "/// doc"]) == ["//// ----", "    /// doc"]


def test_strip_comments_can_drop_docs():
    assert strip_comments(["/// doc", "fn a();"], keep_docs=False) == ["", "fn a();"]


def test_strip_comments_block_comment_keeps_line_count():
    assert strip_comments(["a /* x", "y */ b"]) == ["a", " b"]


def test_strip_comments_nested_block_comment():
    assert strip_comments(["/* a /* b */ c */ d"]) == [" d"]


def test_strip_comments_ignores_markers_inside_strings():
    assert strip_comments(['let u = "http://x"; // c']) == ['let u = "http://x";']


def test_strip_comments_empty_input():
    assert strip_comments([]) == []


def test_collapse_doc_comments_keeps_first_line_of_each_run():
    lines = ["    /// First", "    /// Second", "    fn a();", "/// Third"]
    assert collapse_doc_comments(lines) == [
        "    /// First",
        "    fn a();",
        "    /// Third",
    ]


def test_normalize_comments_without_comments_is_noop():
    lines = ["pub trait A {", "    fn a();", "}"]
    assert normalize_comments(lines) == lines


def test_normalize_comments_is_stable():
    lines = ["/// One", "/// Two", "// gone", "fn a(); /* x */"]
    once = normalize_comments(lines)
    assert normalize_comments(once) == once
    assert once == ["    /// One", "", "fn a();"]
