"""Input document object for the jstor_import pipeline."""

from pathlib import Path
from typing import Union
from dataclasses import dataclass

from jstor_import.utils import find_format


@dataclass
class Document:
    """
    One input file travelling through the pipeline.

    ``content`` holds the raw file bytes once the extraction step has read
    them; it stays empty for placeholder documents created during batching.
    Text content is parsed as is, so its XML encoding declaration is ignored.
    """

    file_path: Path
    content: Union[bytes, str] = b""
    file_format: str = "xml"

    def __hash__(self):
        return hash(self.file_path)

    def __eq__(self, other):
        return isinstance(other, Document) and self.file_path == other.file_path

    @property
    def filename(self) -> str:
        """Get the filename without path."""
        return self.file_path.name

    @property
    def file_name(self) -> str:
        """File stem, the key shared by all output rows of this document."""
        return self.file_path.stem

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> "Document":
        """Create a placeholder Document for a file that has not been read yet."""
        file_path = Path(file_path)
        return cls(file_path=file_path, file_format=find_format(file_path))

    def __str__(self) -> str:
        return f"Document({self.filename}, {self.file_format} format)"
