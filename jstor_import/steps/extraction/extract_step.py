import asyncio
from typing import List, Union

from jstor_import.base_step import PipelineStep
from jstor_import.errors import JstorImportError, ReadFailure
from jstor_import.model.document import Document
from jstor_import.model.records import ExtractionResult
from jstor_import.steps.extraction.article import ArticleExtractor
from jstor_import.utils import read_bytes


class ExtractionStep(PipelineStep):
    """
    Extracts one ``ExtractionResult`` per input document.

    Documents are independent: each one is read and parsed on its own and a
    failure only marks that document as failed.

    Config options:
        - max_concurrency: documents read and parsed at the same time (default 8)
        - debug: log every extracted record
    """

    def __init__(self, config: dict = None, name: str = None):
        super().__init__(config, name)
        self.max_concurrency = max(1, int(self.config.get("max_concurrency", 8)))
        self.extractor = ArticleExtractor(debug=self.debug)

    async def _load(self, document: Document) -> Union[bytes, str]:
        if document.content:
            return document.content
        try:
            document.content = await read_bytes(document.file_path)
        except OSError as e:
            raise ReadFailure(document.file_path, str(e)) from e
        return document.content

    async def _extract_document(self, document: Document, semaphore: asyncio.Semaphore) -> ExtractionResult:
        async with semaphore:
            try:
                data = await self._load(document)
                record = await asyncio.to_thread(
                    self.extractor.extract_raw, data, document.file_name
                )
            except JstorImportError as e:
                self.logger.error(f"Failed to extract metadata from {document.filename}: {e}")
                return ExtractionResult.failure(document.file_name, str(document.file_path), e)

        self.logger.debug(f"Extracted {len(record.authors)} authors from {document.filename}")
        return ExtractionResult.success(document.file_name, str(document.file_path), record)

    async def execute(self, documents: List[Union[Document, ExtractionResult]]) -> List[ExtractionResult]:
        """Execute metadata extraction on input documents.

        Args:
            documents: Documents to extract; results from an earlier run pass through.

        Returns:
            One ExtractionResult per input, in input order.
        """
        if not documents:
            self.logger.warning("No input documents provided to extraction step")
            return []

        self.logger.info(f"Extracting metadata from {len(documents)} documents")

        semaphore = asyncio.Semaphore(self.max_concurrency)
        pending = [doc for doc in documents if isinstance(doc, Document)]
        tasks = [self._extract_document(doc, semaphore) for doc in pending]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        extracted = {}
        for document, outcome in zip(pending, outcomes):
            if isinstance(outcome, Exception):
                self.logger.error(f"Exception processing {document.filename}: {outcome}")
                outcome = ExtractionResult.failure(document.file_name, str(document.file_path), outcome)
            extracted[id(document)] = outcome

        results = [extracted[id(doc)] if isinstance(doc, Document) else doc for doc in documents]

        succeeded = sum(1 for result in results if result.ok)
        self.logger.info(f"Successfully extracted metadata from {succeeded}/{len(results)} documents")
        return results
