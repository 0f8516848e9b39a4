"""Records produced by metadata extraction.

An ``ArticleRecord`` owns its authors, references and footnotes. Those child
records have no identity of their own; they are keyed by their position in
the parent (``author_number`` and friends) and only become rows with a
foreign key when ``jstor_import.tables`` flattens them.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union

PERSON = "person"
GROUP = "group"
UNKNOWN = "unknown"


@dataclass(frozen=True)
class Person:
    given_names: Optional[str] = None
    surname: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    string_name: Optional[str] = None

    kind = PERSON


@dataclass(frozen=True)
class Group:
    collab: Optional[str] = None

    kind = GROUP


@dataclass(frozen=True)
class Unknown:
    kind = UNKNOWN


Contributor = Union[Person, Group, Unknown]


@dataclass(frozen=True)
class AuthorRecord:
    author_number: int
    kind: str = PERSON
    given_names: Optional[str] = None
    surname: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    string_name: Optional[str] = None
    collab: Optional[str] = None

    @classmethod
    def from_contributor(cls, contributor: Contributor, author_number: int) -> "AuthorRecord":
        if isinstance(contributor, Person):
            return cls(
                author_number=author_number,
                kind=PERSON,
                given_names=contributor.given_names,
                surname=contributor.surname,
                prefix=contributor.prefix,
                suffix=contributor.suffix,
                string_name=contributor.string_name,
            )
        if isinstance(contributor, Group):
            return cls(author_number=author_number, kind=GROUP, collab=contributor.collab)
        return cls(author_number=author_number, kind=UNKNOWN)


@dataclass(frozen=True)
class ReferenceRecord:
    reference_number: int
    reference_id: Optional[str] = None
    reference_text: Optional[str] = None


@dataclass(frozen=True)
class FootnoteRecord:
    footnote_number: int
    footnote_text: Optional[str] = None


@dataclass(frozen=True)
class ArticleRecord:
    file_name: str
    journal_id: Optional[str] = None
    journal_doi: Optional[str] = None
    journal_jcode: Optional[str] = None
    journal_pub_id: Optional[str] = None
    journal_title: Optional[str] = None
    publisher_name: Optional[str] = None
    article_id: Optional[str] = None
    article_doi: Optional[str] = None
    article_jcode: Optional[str] = None
    article_pub_id: Optional[str] = None
    article_type: Optional[str] = None
    article_title: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    language: Optional[str] = None
    pub_year: Optional[int] = None
    pub_month: Optional[int] = None
    pub_day: Optional[int] = None
    first_page: Optional[str] = None
    last_page: Optional[str] = None
    page_range: Optional[str] = None
    article_pages: Optional[str] = None
    authors: List[AuthorRecord] = field(default_factory=list)
    references: List[ReferenceRecord] = field(default_factory=list)
    footnotes: List[FootnoteRecord] = field(default_factory=list)

    def scalars(self) -> Dict[str, Any]:
        """The flat part of the record, one value per column."""
        nested = {"authors", "references", "footnotes"}
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name not in nested}


@dataclass
class ExtractionResult:
    """Outcome of extracting one document: a record or a failure reason."""

    file_name: str
    file_path: str
    record: Optional[ArticleRecord] = None
    error_type: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    @classmethod
    def success(cls, file_name: str, file_path: str, record: ArticleRecord) -> "ExtractionResult":
        return cls(file_name=file_name, file_path=file_path, record=record)

    @classmethod
    def failure(cls, file_name: str, file_path: str, error: Exception) -> "ExtractionResult":
        return cls(
            file_name=file_name,
            file_path=file_path,
            error_type=type(error).__name__,
            error=str(error),
        )
