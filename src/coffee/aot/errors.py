"""AOT coverage validation failures."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence


class AotValidationError(AssertionError):
    """Base class for coverage validation failures."""


class MetadataMissingError(AotValidationError):
    """The metadata artifact was never generated for a repository."""

    def __init__(self, contract_name: str, location: Path) -> None:
        super().__init__(f"AOT metadata not found for {contract_name}: {location}")
        self.contract_name = contract_name
        self.location = location


class CoverageGapError(AotValidationError):
    """Declared custom methods are absent from the metadata artifact."""

    def __init__(self, contract_name: str, missing: Sequence[str]) -> None:
        self.contract_name = contract_name
        self.missing: List[str] = list(missing)
        super().__init__(f"AOT skipped methods in {contract_name}: [{', '.join(self.missing)}]")
