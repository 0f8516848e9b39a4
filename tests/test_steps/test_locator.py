import xml.etree.ElementTree as ET

import pytest

from jstor_import.errors import StructuralParseFailure
from jstor_import.steps.extraction.locator import (
    collapsed_text,
    find_all,
    find_first,
    int_at,
    parse_xml,
    text_at,
    text_of,
)

SAMPLE = b"""<article>
  <front>
    <article-meta>
      <article-id pub-id-type="doi">10.2307/123</article-id>
      <article-id pub-id-type="jstor">123</article-id>
      <title-group><article-title> On <italic>Method</italic> </article-title></title-group>
      <volume></volume>
      <issue>IV</issue>
      <pub-date><year>1904</year></pub-date>
    </article-meta>
  </front>
</article>"""


@pytest.fixture
def root():
    return parse_xml(SAMPLE)


def test_parse_xml_returns_root(root):
    assert isinstance(root, ET.Element)
    assert root.tag == "article"


@pytest.mark.parametrize("data", [b"", "   ", b"<article><front></article>", b"not xml at all"])
def test_parse_xml_rejects_malformed_input(data):
    with pytest.raises(StructuralParseFailure):
        parse_xml(data, "broken")


def test_parse_failure_names_the_file():
    with pytest.raises(StructuralParseFailure) as exc_info:
        parse_xml(b"<a>", "sample_file")
    assert exc_info.value.file_name == "sample_file"
    assert "sample_file" in str(exc_info.value)


def test_find_first_takes_first_match(root):
    node = find_first(root, "front/article-meta/article-id")
    assert node.text == "10.2307/123"


def test_find_first_with_attribute_predicate(root):
    node = find_first(root, "front/article-meta/article-id[@pub-id-type='jstor']")
    assert node.text == "123"


def test_find_all_preserves_document_order(root):
    nodes = find_all(root, "front/article-meta/article-id")
    assert [n.text for n in nodes] == ["10.2307/123", "123"]


def test_missing_paths_are_not_errors(root):
    assert find_first(root, "back/ref-list") is None
    assert find_all(root, "back/ref-list/ref") == []
    assert text_at(root, "front/journal-meta/journal-id") is None


def test_lookups_through_absent_nodes():
    assert find_first(None, "anything") is None
    assert find_all(None, "anything") == []
    assert text_of(None) is None
    assert int_at(None, "year") is None


def test_text_is_concatenated_and_untrimmed(root):
    assert text_at(root, "front/article-meta/title-group/article-title") == " On Method "


def test_empty_element_gives_none(root):
    assert text_at(root, "front/article-meta/volume") is None


def test_collapsed_text():
    node = ET.fromstring("<p>  Second\n     note. </p>")
    assert collapsed_text(node) == "Second note."


def test_int_at(root):
    assert int_at(root, "front/article-meta/pub-date/year") == 1904
    assert int_at(root, "front/article-meta/issue") is None
