import pytest

from bookimport.syntax import DEFAULT_SYNTAX, ImportSyntax, is_valid_tag


def test_default_surfaces():
    assert DEFAULT_SYNTAX.directive_text("../src/lib.rs", "my-tag") == "{{#bookimport ../src/lib.rs@my-tag}}"
    assert DEFAULT_SYNTAX.marker_text("start", "my-tag") == "@book start my-tag"
    assert ImportSyntax() == DEFAULT_SYNTAX


@pytest.mark.parametrize("tag", ["a", "my-tag", "my_tag.v2", "A1", "0"])
def test_valid_tags(tag):
    assert is_valid_tag(tag)


@pytest.mark.parametrize("tag", ["", "two words", "a@b", "a/b", "tag}}"])
def test_invalid_tags(tag):
    assert not is_valid_tag(tag)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"directive_keyword": ""},
        {"directive_keyword": "book import"},
        {"marker_keyword": ""},
        {"marker_keyword": "@book\t"},
        {"escape_char": ""},
        {"escape_char": "\\\\"},
    ],
)
def test_invalid_syntax(kwargs):
    with pytest.raises(ValueError):
        ImportSyntax(**kwargs)


def test_keywords_are_literals():
    # regex metacharacters in keywords are matched literally
    syntax = ImportSyntax(directive_keyword="b.i", marker_keyword="@b+")
    assert syntax.directive_open.search("{{#b.i a@b}}")
    assert not syntax.directive_open.search("{{#bxi a@b}}")
    assert syntax.marker.search("// @b+ start t")
    assert not syntax.marker.search("// @bb start t")
