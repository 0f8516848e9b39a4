"""
Extraction of bibliographic metadata from JSTOR XML.

- locator.py: path lookups and text helpers on ElementTree nodes
- article.py: field paths and the ArticleExtractor that builds one record
- extract_step.py: pipeline step running the extractor over a batch
"""
