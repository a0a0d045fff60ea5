"""Build-time query processing and its signature coverage check."""

from coffee.aot.contract import (
    CRUD_CONTRACT,
    DeclaredMethod,
    RepositoryContract,
    contract_from_repository,
)
from coffee.aot.errors import AotValidationError, CoverageGapError, MetadataMissingError
from coffee.aot.metadata import load_metadata, metadata_location
from coffee.aot.processor import process_all, process_repository
from coffee.aot.validator import ContractCoverage, coverage_gap, declared_methods, validate, validate_all

__all__ = [
    "CRUD_CONTRACT",
    "AotValidationError",
    "ContractCoverage",
    "CoverageGapError",
    "DeclaredMethod",
    "MetadataMissingError",
    "RepositoryContract",
    "contract_from_repository",
    "coverage_gap",
    "declared_methods",
    "load_metadata",
    "metadata_location",
    "process_all",
    "process_repository",
    "validate",
    "validate_all",
]
