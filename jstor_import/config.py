from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, Field, field_validator

ALLOWED_STAGES = {"extraction", "export"}


class Inputs(BaseModel):
    path: Union[str, list[str]]
    extensions: list[str] = ["xml"]

    def get_files(self) -> list[Path]:
        paths = [self.path] if isinstance(self.path, str) else self.path
        suffixes = {f".{ext.lstrip('.').lower()}" for ext in self.extensions}
        files = []

        for p in paths:
            p = Path(p)

            if p.is_file():
                files.append(p)
            elif p.is_dir():
                # recursive search, only files with a known suffix
                files.extend(sorted(f for f in p.rglob("*") if f.is_file() and f.suffix.lower() in suffixes))
        return files


class PipelineConfig(BaseModel):
    inputs: Inputs
    batch_size: int = Field(default=100, ge=1)
    stages: list[dict[str, Any]] = []  # stage name + stage config

    @field_validator("stages")
    @classmethod
    def check_stages(cls, v):
        for stage in v:
            if "name" not in stage:
                raise ValueError(f"Stage without a name: {stage}")
            if stage["name"] not in ALLOWED_STAGES:
                raise ValueError(f"Unsupported stage: {stage['name']}. Allowed: {ALLOWED_STAGES}")
        names = [stage["name"] for stage in v]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate stages: {names}")
        if "extraction" in names and "export" in names and names.index("extraction") > names.index("export"):
            raise ValueError("The extraction stage must run before the export stage")
        return v

    def stage_config(self, name: str) -> dict[str, Any]:
        stage = next((s for s in self.stages if s["name"] == name), None)
        if stage is None:
            return {}
        return stage.get("config", {}) or {}


def load_config(path: Union[str, Path]) -> PipelineConfig:
    with open(path) as f:
        raw = yaml.safe_load(f)
    if not raw or "pipeline" not in raw:
        raise ValueError(f"No 'pipeline' section in config file {path}")
    return PipelineConfig(**raw["pipeline"])  # unpack
