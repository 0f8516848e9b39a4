from pathlib import Path

from jstor_import.checkpoint import CheckpointManager
from jstor_import.model.document import Document


def test_mark_and_reload(temp_dir):
    manager = CheckpointManager(temp_dir)
    document = Document.from_path("input/a.xml")

    manager.mark_processed(document)
    manager.mark_processed(document)

    assert manager.is_processed(document)
    assert len(manager.checkpoint_file.read_text().splitlines()) == 1

    reloaded = CheckpointManager(temp_dir, resume=True)
    assert reloaded.is_processed(Document.from_path("input/a.xml"))
    assert not reloaded.is_processed(Document.from_path("other/a.xml"))


def test_without_resume_ignores_existing_checkpoint(temp_dir):
    CheckpointManager(temp_dir).mark_processed(Document.from_path("a.xml"))

    manager = CheckpointManager(temp_dir, resume=False)

    assert manager.get_stats()["processed_count"] == 0


def test_filter_unprocessed(temp_dir):
    manager = CheckpointManager(temp_dir)
    documents = [Document.from_path(f"{name}.xml") for name in "abc"]
    manager.mark_processed(documents[1])

    assert manager.filter_unprocessed(documents) == [documents[0], documents[2]]


def test_clear(temp_dir):
    manager = CheckpointManager(temp_dir)
    manager.mark_processed(Document.from_path("a.xml"))

    manager.clear()

    assert not manager.checkpoint_file.exists()
    assert manager.get_stats()["processed_count"] == 0


def test_corrupt_checkpoint_is_ignored(temp_dir):
    (Path(temp_dir) / ".pipeline_checkpoint.jsonl").write_text("{not json\n")

    manager = CheckpointManager(temp_dir, resume=True)

    assert manager.processed_ids == set()
