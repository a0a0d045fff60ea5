"""Metadata artifact written by AOT processing, one JSON file per repository."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from coffee.aot.contract import RepositoryContract


class ProcessedMethod(BaseModel):
    name: str
    signature: str
    # Shape varies by the module that processed the method.
    query: Optional[Dict[str, Any]] = None


class RepositoryMetadata(BaseModel):
    name: str = ""
    module: str = "SQLALCHEMY"
    type: str = "IMPERATIVE"
    methods: List[ProcessedMethod]


def metadata_location(output_dir: Path, contract: RepositoryContract) -> Path:
    location = Path(output_dir)
    if contract.package:
        location = location.joinpath(*contract.package.split("."))
    return location / f"{contract.name}.json"


def load_metadata(location: Path) -> RepositoryMetadata:
    try:
        payload = json.loads(Path(location).read_text(encoding="utf-8"))
        return RepositoryMetadata.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ValueError(f"Malformed AOT metadata in {location}: {exc}") from exc


def write_metadata(output_dir: Path, contract: RepositoryContract, metadata: RepositoryMetadata) -> Path:
    location = metadata_location(output_dir, contract)
    location.parent.mkdir(parents=True, exist_ok=True)
    location.write_text(json.dumps(metadata.model_dump(exclude_none=True), indent=2) + "\n", encoding="utf-8")
    return location
