"""Flatten extraction results into normalized pandas tables.

``articles`` has one row per article. ``authors``, ``references`` and
``footnotes`` have one row per child record and carry ``file_name``,
``file_path`` and ``article_id`` of their article as a foreign key.
``failures`` lists the documents that could not be extracted.
"""

from dataclasses import asdict, fields
from typing import Dict, Iterable, List

import pandas as pd

from jstor_import.model.records import (
    ArticleRecord,
    AuthorRecord,
    ExtractionResult,
    FootnoteRecord,
    ReferenceRecord,
)

# file_path keeps same-named files from different directories apart
KEY_COLUMNS = ["file_name", "file_path", "article_id"]
FAILURE_COLUMNS = ["file_name", "file_path", "error_type", "error"]

TABLE_NAMES = ("articles", "authors", "references", "footnotes", "failures")


def _columns(record_type) -> List[str]:
    return [f.name for f in fields(record_type)]


ARTICLE_COLUMNS = ["file_name", "file_path"] + [
    c for c in _columns(ArticleRecord) if c not in {"file_name", "authors", "references", "footnotes"}
]
AUTHOR_COLUMNS = KEY_COLUMNS + _columns(AuthorRecord)
REFERENCE_COLUMNS = KEY_COLUMNS + _columns(ReferenceRecord)
FOOTNOTE_COLUMNS = KEY_COLUMNS + _columns(FootnoteRecord)


def _child_rows(result: ExtractionResult, children) -> List[Dict]:
    key = {
        "file_name": result.file_name,
        "file_path": result.file_path,
        "article_id": result.record.article_id,
    }
    return [{**key, **asdict(child)} for child in children]


def build_tables(results: Iterable[ExtractionResult]) -> Dict[str, pd.DataFrame]:
    articles, authors, references, footnotes, failures = [], [], [], [], []

    for result in results:
        if not result.ok:
            failures.append({column: getattr(result, column) for column in FAILURE_COLUMNS})
            continue
        record = result.record
        articles.append({"file_path": result.file_path, **record.scalars()})
        authors.extend(_child_rows(result, record.authors))
        references.extend(_child_rows(result, record.references))
        footnotes.extend(_child_rows(result, record.footnotes))

    tables = {
        "articles": pd.DataFrame(articles, columns=ARTICLE_COLUMNS),
        "authors": pd.DataFrame(authors, columns=AUTHOR_COLUMNS),
        "references": pd.DataFrame(references, columns=REFERENCE_COLUMNS),
        "footnotes": pd.DataFrame(footnotes, columns=FOOTNOTE_COLUMNS),
        "failures": pd.DataFrame(failures, columns=FAILURE_COLUMNS),
    }
    # publication dates may be missing, keep them integer
    for column in ("pub_year", "pub_month", "pub_day"):
        tables["articles"][column] = tables["articles"][column].astype("Int64")
    return tables
