"""Signature coverage check of repositories against their AOT metadata.

Every custom method a repository declares must appear in the metadata
artifact written at build time. Methods are compared by signature key so
overloads are checked independently. Methods inherited from the CRUD base
contract are never checked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from coffee.aot.contract import CRUD_CONTRACT, DeclaredMethod, RepositoryContract, overrides_base
from coffee.aot.errors import AotValidationError, CoverageGapError, MetadataMissingError
from coffee.aot.metadata import ProcessedMethod, load_metadata, metadata_location
from coffee.aot.signature import declared_signature_key, processed_signature_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractCoverage:
    contract: RepositoryContract
    location: Path
    error: Optional[AotValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def declared_methods(
    contract: RepositoryContract,
    base: RepositoryContract = CRUD_CONTRACT,
) -> List[DeclaredMethod]:
    return [method for method in contract.methods if not overrides_base(method, base)]


def coverage_gap(
    contract: RepositoryContract,
    records: Iterable[ProcessedMethod],
    base: RepositoryContract = CRUD_CONTRACT,
) -> List[str]:
    processed = {processed_signature_key(record.name, record.signature) for record in records}
    missing: List[str] = []
    for method in declared_methods(contract, base):
        key = declared_signature_key(method)
        if key not in processed and key not in missing:
            missing.append(key)
    return missing


def validate(
    contract: RepositoryContract,
    location: Path,
    base: RepositoryContract = CRUD_CONTRACT,
) -> None:
    location = Path(location)
    if not location.exists():
        raise MetadataMissingError(contract.name, location)
    metadata = load_metadata(location)
    missing = coverage_gap(contract, metadata.methods, base)
    if missing:
        raise CoverageGapError(contract.name, missing)
    logger.info("All custom methods of %s were AOT processed", contract.name)


def validate_all(contracts: Iterable[RepositoryContract], output_dir: Path) -> List[ContractCoverage]:
    results: List[ContractCoverage] = []
    for contract in contracts:
        location = metadata_location(output_dir, contract)
        try:
            validate(contract, location)
        except AotValidationError as exc:
            logger.error("%s", exc)
            results.append(ContractCoverage(contract=contract, location=location, error=exc))
            continue
        results.append(ContractCoverage(contract=contract, location=location))
    return results
