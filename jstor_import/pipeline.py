import argparse
import asyncio
import time
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

import pandas as pd
from tqdm import tqdm

from jstor_import.checkpoint import CheckpointManager
from jstor_import.config import PipelineConfig, load_config
from jstor_import.logging import get_logger, set_log_level
from jstor_import.model.document import Document
from jstor_import.model.records import ExtractionResult
from jstor_import.steps.export.export_step import ExportStep
from jstor_import.steps.extraction.extract_step import ExtractionStep
from jstor_import.tables import build_tables
from jstor_import.utils import chunked

step_mapping = {
    "extraction": ExtractionStep,
    "export": ExportStep,
}


def pending_documents(input_files: List[Path],
                      checkpoint_manager: Optional[CheckpointManager] = None) -> List[Document]:
    """Placeholder Documents for the input files not exported yet.

    Args:
        input_files: List of Path objects pointing to input files
        checkpoint_manager: Optional CheckpointManager for resume functionality
    """
    documents = [Document.from_path(path) for path in input_files]
    if checkpoint_manager:
        documents = checkpoint_manager.filter_unprocessed(documents)
    return documents


def create_batches(documents: List[Document], batch_size: int) -> Iterator[List[Document]]:
    yield from chunked(documents, batch_size)


def resolve_stages(cfg: PipelineConfig) -> List[dict]:
    """Stages to run, with extraction first and export last when missing."""
    stages = list(cfg.stages)
    names = [stage["name"] for stage in stages]
    if "extraction" not in names:
        stages.insert(0, {"name": "extraction"})
    if "export" not in names:
        stages.append({"name": "export"})
    return stages


async def run_pipeline(cfg: PipelineConfig) -> Dict[str, int]:
    logger = get_logger("pipeline")
    logger.info("Starting pipeline execution")

    start_time = time.perf_counter()
    input_files = cfg.inputs.get_files()
    stages = resolve_stages(cfg)
    logger.info(f"Processing {len(input_files)} files with batch size {cfg.batch_size}")
    logger.info(f"Stages: {[stage['name'] for stage in stages]}")

    # steps are built once so the export checkpoint is shared by all batches
    steps = [step_mapping[stage["name"]](config=stage.get("config", {})) for stage in stages]

    checkpoint_manager = None
    export_config = cfg.stage_config("export")
    if export_config.get("resume", False):
        checkpoint_manager = CheckpointManager(Path(export_config.get("output_dir", "./output")), resume=True)
        logger.info(f"Checkpoint file: {checkpoint_manager.get_stats()['checkpoint_file']}")

    documents = pending_documents(input_files, checkpoint_manager)

    stats = {"documents": 0, "succeeded": 0, "failed": 0}
    with tqdm(total=len(documents), desc="Extracting", unit="doc") as pbar:
        for batch in create_batches(documents, cfg.batch_size):
            data = batch
            for step in steps:
                data = await step(data)

            stats["documents"] += len(data)
            stats["succeeded"] += sum(1 for result in data if result.ok)
            stats["failed"] += sum(1 for result in data if not result.ok)
            pbar.update(len(batch))

    elapsed_time = time.perf_counter() - start_time
    logger.info(f"Pipeline completed in {elapsed_time:.2f} seconds")
    logger.info(f"Extracted {stats['succeeded']}/{stats['documents']} documents, {stats['failed']} failed")
    return stats


async def extract_files(paths: List[Union[str, Path]], max_concurrency: int = 8) -> List[ExtractionResult]:
    """Extract a list of files without writing anything."""
    step = ExtractionStep(config={"max_concurrency": max_concurrency})
    return await step([Document.from_path(path) for path in paths])


def import_tables(paths: List[Union[str, Path]], max_concurrency: int = 8) -> Dict[str, pd.DataFrame]:
    """Extract files and return the articles, authors, references, footnotes and failures tables."""
    results = asyncio.run(extract_files(paths, max_concurrency))
    return build_tables(results)


def main(config_path: str = "config.yaml"):
    """entry point for the pipeline"""
    cfg = load_config(config_path)
    return asyncio.run(run_pipeline(cfg))


def cli():
    parser = argparse.ArgumentParser(prog = "jstor-import")
    subparsers = parser.add_subparsers(dest = "command")

    run_parser = subparsers.add_parser("run", help = "Extract metadata tables from JSTOR XML files")
    run_parser.add_argument("--config", default = "config.yaml", help = "Path to the pipeline YAML config")
    run_parser.add_argument("--log-level", default = None, help = "Console log level (DEBUG, INFO, ...)")

    args = parser.parse_args()

    if args.command == "run":
        if args.log_level:
            set_log_level(args.log_level)
        main(args.config)
    else:
        parser.print_help()


if __name__ == "__main__":
    cli()
