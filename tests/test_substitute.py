import pytest

from bookimport.substitute import Replacement, substitute


def test_spans_replaced_and_rest_identical():
    doc = "head [A] middle [B] tail"
    a = doc.index("[A]")
    b = doc.index("[B]")
    out = substitute(doc, [Replacement((a, a + 3), "alpha\nbeta"), Replacement((b, b + 3), "")])
    assert out == "head alpha\nbeta middle  tail"


def test_no_replacements_returns_identical_text():
    doc = "unchanged\r\n\ttext  \n"
    assert substitute(doc, []) == doc


def test_adjacent_spans():
    assert substitute("abcd", [Replacement((0, 2), "X"), Replacement((2, 4), "Y")]) == "XY"


def test_replacement_text_is_not_reprocessed():
    doc = "{{#bookimport a@b}}"
    out = substitute(doc, [Replacement((0, len(doc)), "{{#bookimport c@d}}")])
    assert out == "{{#bookimport c@d}}"


def test_empty_span_inserts():
    assert substitute("ab", [Replacement((1, 1), "-")]) == "a-b"


def test_unordered_spans_are_rejected():
    with pytest.raises(ValueError):
        substitute("abcdef", [Replacement((3, 4), "x"), Replacement((0, 1), "y")])


def test_overlapping_spans_are_rejected():
    with pytest.raises(ValueError):
        substitute("abcdef", [Replacement((0, 3), "x"), Replacement((2, 4), "y")])


def test_span_outside_document_is_rejected():
    with pytest.raises(ValueError):
        substitute("abc", [Replacement((1, 10), "x")])
