"""Extract article and author tables from JSTOR XML files."""

__version__ = "0.1.0"
