from pathlib import Path
from typing import Dict, List

import aiofiles
import pandas as pd

from jstor_import.base_step import PipelineStep
from jstor_import.checkpoint import CheckpointManager
from jstor_import.model.document import Document
from jstor_import.model.records import ExtractionResult
from jstor_import.tables import TABLE_NAMES, build_tables

SUPPORTED_FORMATS = {"csv", "jsonl", "dummy"}


class ExportStep(PipelineStep):

    def __init__(self, config: dict = None, name: str = "ExportStep"):
        """Initialize the export step.

        Args:
            config: Configuration containing:

                - output_dir: Output directory path
                - format: Output format (csv, jsonl or dummy)
                - prefix: File name prefix, files are named ``<prefix>_<table>.<format>``
                - resume: Whether to enable resume functionality (default: False)
            name: Name for logging purposes
        """
        super().__init__(config, name)

        self.output_dir = Path(self.config.get("output_dir", "./output"))
        self.format = self.config.get("format", "csv")
        self.prefix = self.config.get("prefix", "jstor")
        if self.format not in SUPPORTED_FORMATS:
            raise ValueError(f"Invalid export format: {self.format}")

        self.resume = self.config.get("resume", False)
        if self.resume:
            self.checkpoint = CheckpointManager(self.output_dir, resume=True)
            stats = self.checkpoint.get_stats()
            self.logger.info(f"Resume mode enabled: {stats['processed_count']} documents already processed")
        else:
            self.checkpoint = None

        self._started = False

    def output_file(self, table: str) -> Path:
        return self.output_dir / f"{self.prefix}_{table}.{self.format}"

    def _clear_previous_run(self) -> None:
        """A run without resume starts its tables from scratch."""
        for table in TABLE_NAMES:
            output_file = self.output_file(table)
            if output_file.exists():
                self.logger.warning(f"Replacing {output_file} from a previous run")
                output_file.unlink()

    async def _append(self, table: str, frame: pd.DataFrame) -> None:
        output_file = self.output_file(table)
        if self.format == "csv":
            # batches append to the same file, header only once
            text = frame.to_csv(index=False, header=not output_file.exists())
        else:
            text = frame.to_json(orient="records", lines=True)
            if not text.endswith("\n"):
                text += "\n"
        async with aiofiles.open(output_file, "a", encoding="utf-8") as f:
            await f.write(text)
        self.logger.info(f"Saved {len(frame)} rows to {output_file}")

    async def export_tables(self, tables: Dict[str, pd.DataFrame]) -> None:
        if not self.output_dir.exists():
            self.logger.info(f"{self.output_dir} does not exist. creating...")
            self.output_dir.mkdir(parents=True, exist_ok=True)

        if not self._started and not self.resume:
            self._clear_previous_run()
        self._started = True

        for table, frame in tables.items():
            if frame.empty:
                continue
            await self._append(table, frame)

    async def execute(self, results: List[ExtractionResult]) -> List[ExtractionResult]:
        if self.format == "dummy":
            return results

        await self.export_tables(build_tables(results))

        if self.checkpoint:
            for result in results:
                self.checkpoint.mark_processed(Document.from_path(result.file_path))

        failed = sum(1 for result in results if not result.ok)
        if failed:
            self.logger.warning(f"{failed} of {len(results)} documents could not be extracted")
        return results
