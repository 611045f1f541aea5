"""Tests for service block extraction."""

import pytest

from traitdiff.analyzers.base import Dialect, NoServiceBlockFound, SourceDocument
from traitdiff.extractors.service_block import extract_service_block


def test_extracts_block_after_marker(rpc_api_file):
    document = SourceDocument.load(rpc_api_file)
    block = extract_service_block(document.lines, source_name=document.name)

    assert block.lines[0] == "pub trait RpcApi {"
    assert block.lines[-1] == "}"
    assert document.lines[block.start_line - 1] == "pub trait RpcApi {"
    assert block.end_line - block.start_line + 1 == len(block.lines)
    assert block.source_name == "rpc_api.rs"


def test_trait_before_marker_is_ignored(rpc_api_file):
    document = SourceDocument.load(rpc_api_file)
    block = extract_service_block(document.lines)
    assert "Helper" not in block.text
    assert "Other" not in block.text


def test_empty_trait():
    block = extract_service_block(["#[tarpc::service]", "pub trait Empty {}"])
    assert block.lines == ("pub trait Empty {}",)
    assert block.body == ""


def test_marker_and_trait_on_same_line():
    lines = ["#[tarpc::service] pub trait Inline {", "    fn a();", "}", "fn after() {}"]
    block = extract_service_block(lines)
    assert len(block.lines) == 3


def test_trait_keyword_must_be_whole_word():
    lines = ["#[tarpc::service]", "type Portrait = u8;", "pub trait Real {", "}"]
    block = extract_service_block(lines)
    assert block.lines[0] == "pub trait Real {"


def test_braces_in_literals_and_comments_do_not_end_block():
    lines = [
        "#[tarpc::service]",
        "pub trait Quoted {",
        '    /// Returns "}" on failure',
        "    fn a() -> String; // }",
        "    /* } */",
        "    fn b();",
        "}",
        "struct After {}",
    ]
    block = extract_service_block(lines)
    assert block.lines[-1] == "}"
    assert "fn b();" in block.text
    assert "After" not in block.text


def test_marker_inside_comment_is_ignored():
    lines = ["// #[tarpc::service]", "pub trait NotIt {", "}"]
    with pytest.raises(NoServiceBlockFound) as exc:
        extract_service_block(lines, source_name="a.rs")
    assert "marker" in exc.value.reason
    assert exc.value.source_name == "a.rs"


def test_missing_marker():
    with pytest.raises(NoServiceBlockFound):
        extract_service_block(["pub trait A {", "}"])


def test_marker_without_trait():
    with pytest.raises(NoServiceBlockFound) as exc:
        extract_service_block(["#[tarpc::service]", "struct A;"])
    assert "no 'trait' declaration" in exc.value.reason


def test_unbalanced_braces():
    lines = ["#[tarpc::service]", "pub trait Open {", "    fn a();"]
    with pytest.raises(NoServiceBlockFound) as exc:
        extract_service_block(lines)
    assert "never balance" in exc.value.reason


def test_block_ends_only_after_depth_was_positive():
    lines = ["#[tarpc::service]", "} pub trait Stray {", "    fn a();", "}"]
    with pytest.raises(NoServiceBlockFound) as exc:
        extract_service_block(lines)
    assert "never balance" in exc.value.reason


def test_block_closing_mid_line():
    lines = ["#[tarpc::service]", "pub trait OneLine { fn a(); } struct After {}"]
    block = extract_service_block(lines)
    assert block.lines == ("pub trait OneLine { fn a(); } struct After {}",)


def test_empty_document():
    with pytest.raises(NoServiceBlockFound):
        extract_service_block([])


def test_only_first_block_is_extracted():
    lines = [
        "#[tarpc::service]",
        "pub trait First {",
        "}",
        "#[tarpc::service]",
        "pub trait Second {",
        "}",
    ]
    block = extract_service_block(lines)
    assert block.lines == ("pub trait First {", "}")


def test_custom_dialect_marker():
    dialect = Dialect(name="myrpc", marker="#[myrpc::service]")
    lines = ["#[tarpc::service]", "#[myrpc::service]", "pub trait Mine {", "}"]
    with pytest.raises(NoServiceBlockFound):
        extract_service_block(lines[2:], dialect)
    block = extract_service_block(lines, dialect)
    assert block.lines[0] == "pub trait Mine {"
