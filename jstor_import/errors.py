"""Exceptions raised while importing JSTOR documents.

Only failures that make a whole document unusable are exceptions. A field
that is missing from a document is reported as ``None`` in the record.
"""


class JstorImportError(Exception):
    """Base class for all jstor_import errors."""


class StructuralParseFailure(JstorImportError):
    """The raw input could not be parsed into an XML tree."""

    def __init__(self, reason: str, file_name: str = None):
        self.reason = reason
        self.file_name = file_name
        prefix = f"{file_name}: " if file_name else ""
        super().__init__(f"{prefix}unable to parse XML ({reason})")


class ReadFailure(JstorImportError):
    """The input file could not be read or decoded."""

    def __init__(self, file_path, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Failed to read file {file_path}: {reason}")
