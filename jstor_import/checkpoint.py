"""Checkpoint management for resuming an interrupted import."""
import json
import hashlib
from pathlib import Path
from typing import Set, List

from jstor_import.logging import get_logger
from jstor_import.model.document import Document


class CheckpointManager:
    """Remembers which documents were already exported."""

    def __init__(self, output_dir: Path, resume: bool = False):
        """Initialize checkpoint manager.

        Args:
            output_dir: Directory where checkpoint file will be stored
            resume: Whether to load existing checkpoint on initialization
        """
        self.output_dir = Path(output_dir)
        self.checkpoint_file = self.output_dir / ".pipeline_checkpoint.jsonl"
        self.processed_ids: Set[str] = set()
        self.logger = get_logger(self.__class__.__name__)

        self.output_dir.mkdir(parents=True, exist_ok=True)

        if resume and self.checkpoint_file.exists():
            self._load_checkpoint()

    def _get_document_id(self, doc: Document) -> str:
        """Id from the file path, so placeholders match before their content is read."""
        path_hash = hashlib.md5(str(doc.file_path).encode()).hexdigest()[:8]
        return f"{doc.file_name}_{path_hash}"

    def _load_checkpoint(self) -> None:
        try:
            with open(self.checkpoint_file, "r", encoding="utf-8") as f:
                for line in f:
                    if line.strip():
                        data = json.loads(line)
                        self.processed_ids.add(data["doc_id"])
        except (OSError, json.JSONDecodeError, KeyError) as e:
            self.logger.warning(f"Failed to load checkpoint {self.checkpoint_file}: {e}")
            self.processed_ids = set()

    def mark_processed(self, doc: Document) -> None:
        doc_id = self._get_document_id(doc)
        if doc_id in self.processed_ids:
            return
        self.processed_ids.add(doc_id)

        try:
            with open(self.checkpoint_file, "a", encoding="utf-8") as f:
                checkpoint_data = {
                    "doc_id": doc_id,
                    "filename": doc.filename,
                    "file_path": str(doc.file_path),
                }
                f.write(json.dumps(checkpoint_data) + "\n")
        except OSError as e:
            self.logger.warning(f"Failed to write checkpoint: {e}")

    def is_processed(self, doc: Document) -> bool:
        return self._get_document_id(doc) in self.processed_ids

    def filter_unprocessed(self, documents: List[Document]) -> List[Document]:
        """Filter out documents that have already been processed."""
        unprocessed = [doc for doc in documents if not self.is_processed(doc)]

        skipped_count = len(documents) - len(unprocessed)
        if skipped_count > 0:
            self.logger.info(f"Checkpoint: skipping {skipped_count} already processed documents")

        return unprocessed

    def clear(self) -> None:
        """Clear the checkpoint file and reset processed IDs."""
        if self.checkpoint_file.exists():
            self.checkpoint_file.unlink()
        self.processed_ids = set()

    def get_stats(self) -> dict:
        return {
            "checkpoint_exists": self.checkpoint_file.exists(),
            "processed_count": len(self.processed_ids),
            "checkpoint_file": str(self.checkpoint_file)
        }
