"""
Metadata extraction for JSTOR article XML.

Every field is read from a fixed path and tolerates its own absence. A
missing subtree yields ``None`` (or an empty list) for the fields below it
while the remaining fields are still extracted.
"""

import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Union

from jstor_import.logging import get_logger
from jstor_import.model.records import (
    ArticleRecord,
    AuthorRecord,
    Contributor,
    FootnoteRecord,
    Group,
    Person,
    ReferenceRecord,
    Unknown,
)
from jstor_import.steps.extraction.locator import (
    XML_LANG,
    attr_of,
    collapsed_text,
    find_all,
    find_first,
    int_at,
    parse_xml,
    text_at,
)

JOURNAL_META = "front/journal-meta"
ARTICLE_META = "front/article-meta"

# singular fields, first match wins; alternatives are tried in order
SCALAR_PATHS: Dict[str, List[str]] = {
    "journal_id": [f"{JOURNAL_META}/journal-id"],
    "journal_doi": [f"{JOURNAL_META}/journal-id[@journal-id-type='doi']"],
    "journal_jcode": [f"{JOURNAL_META}/journal-id[@journal-id-type='jstor']"],
    "journal_pub_id": [f"{JOURNAL_META}/journal-id[@journal-id-type='publisher-id']"],
    "journal_title": [
        f"{JOURNAL_META}/journal-title-group/journal-title",
        f"{JOURNAL_META}/journal-title",
    ],
    "publisher_name": [f"{JOURNAL_META}/publisher/publisher-name"],
    "article_id": [f"{ARTICLE_META}/article-id"],
    "article_doi": [f"{ARTICLE_META}/article-id[@pub-id-type='doi']"],
    "article_jcode": [f"{ARTICLE_META}/article-id[@pub-id-type='jstor']"],
    "article_pub_id": [f"{ARTICLE_META}/article-id[@pub-id-type='publisher-id']"],
    "article_title": [f"{ARTICLE_META}/title-group/article-title"],
    "volume": [f"{ARTICLE_META}/volume"],
    "issue": [f"{ARTICLE_META}/issue"],
    "first_page": [f"{ARTICLE_META}/fpage"],
    "last_page": [f"{ARTICLE_META}/lpage"],
    "page_range": [f"{ARTICLE_META}/page-range"],
}

PUB_DATE = f"{ARTICLE_META}/pub-date"
CONTRIBUTORS = "contrib-group/contrib"
LANGUAGE_META = f"{ARTICLE_META}/custom-meta-group/custom-meta[meta-name='lang']/meta-value"
REFERENCES = "back/ref-list//ref"
FOOTNOTES = "back/fn-group/fn"


def first_text(root: ET.Element, paths: List[str]) -> Optional[str]:
    for path in paths:
        value = text_at(root, path)
        if value is not None:
            return value
    return None


def summarize_pages(first_page: Optional[str], last_page: Optional[str],
                    page_range: Optional[str]) -> Optional[str]:
    """Single page-range value for an article.

    An explicit ``page-range`` wins, then ``fpage-lpage``, then ``fpage`` alone.
    """
    if page_range is not None:
        return page_range
    if first_page is not None and last_page is not None:
        if first_page == last_page:
            return first_page
        return f"{first_page}-{last_page}"
    return first_page


def classify_contributor(contrib: ET.Element) -> Contributor:
    name = find_first(contrib, "name")
    if name is None:
        name = find_first(contrib, "string-name")

    if name is not None:
        given_names = text_at(name, "given-names")
        surname = text_at(name, "surname")
        string_name = None
        if given_names is None and surname is None:
            string_name = collapsed_text(name)
        return Person(
            given_names=given_names,
            surname=surname,
            prefix=text_at(name, "prefix"),
            suffix=text_at(name, "suffix"),
            string_name=string_name,
        )

    collab = find_first(contrib, "collab")
    if collab is not None:
        return Group(collab=collapsed_text(collab))

    return Unknown()


def extract_authors(article_meta: Optional[ET.Element]) -> List[AuthorRecord]:
    """Authors in document order, numbered from 1."""
    return [
        AuthorRecord.from_contributor(classify_contributor(contrib), number)
        for number, contrib in enumerate(find_all(article_meta, CONTRIBUTORS), start=1)
    ]


def extract_references(root: ET.Element) -> List[ReferenceRecord]:
    references = []
    for number, ref in enumerate(find_all(root, REFERENCES), start=1):
        citation = find_first(ref, "mixed-citation")
        if citation is None:
            citation = find_first(ref, "element-citation")
        if citation is None:
            citation = ref
        references.append(
            ReferenceRecord(
                reference_number=number,
                reference_id=attr_of(ref, "id"),
                reference_text=collapsed_text(citation),
            )
        )
    return references


def extract_footnotes(root: ET.Element) -> List[FootnoteRecord]:
    return [
        FootnoteRecord(footnote_number=number, footnote_text=collapsed_text(fn))
        for number, fn in enumerate(find_all(root, FOOTNOTES), start=1)
    ]


def extract_language(root: ET.Element) -> Optional[str]:
    return attr_of(root, XML_LANG) or text_at(root, LANGUAGE_META)


class ArticleExtractor:
    """
    Builds one ``ArticleRecord`` from a parsed JSTOR article.

    Args:
        debug: Log the extracted record for every document.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.logger = get_logger(self.__class__.__name__)

    def extract(self, root: ET.Element, file_name: str) -> ArticleRecord:
        scalars = {field: first_text(root, paths) for field, paths in SCALAR_PATHS.items()}
        pub_date = find_first(root, PUB_DATE)

        record = ArticleRecord(
            file_name=file_name,
            article_type=attr_of(root, "article-type"),
            language=extract_language(root),
            pub_year=int_at(pub_date, "year"),
            pub_month=int_at(pub_date, "month"),
            pub_day=int_at(pub_date, "day"),
            article_pages=summarize_pages(
                scalars["first_page"], scalars["last_page"], scalars["page_range"]
            ),
            authors=extract_authors(find_first(root, ARTICLE_META)),
            references=extract_references(root),
            footnotes=extract_footnotes(root),
            **scalars,
        )

        if record.article_title is None:
            self.logger.warning(f"No article title in {file_name}")
        if self.debug:
            self.logger.debug(f"Extracted record for {file_name}: {record.scalars()}")
        return record

    def extract_raw(self, data: Union[bytes, str], file_name: str) -> ArticleRecord:
        """Parse and extract in one go; raises StructuralParseFailure on bad XML."""
        return self.extract(parse_xml(data, file_name), file_name)
