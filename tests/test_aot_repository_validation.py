from __future__ import annotations

from pathlib import Path

import pytest

from coffee.aot.contract import contract_from_repository
from coffee.aot.metadata import metadata_location
from coffee.aot.processor import process_all
from coffee.aot.validator import validate
from coffee.infra import REPOSITORIES


@pytest.fixture(scope="module")
def aot_output(tmp_path_factory) -> Path:
    output_dir = tmp_path_factory.mktemp("aot")
    process_all(REPOSITORIES, output_dir)
    return output_dir


@pytest.mark.parametrize("repository", REPOSITORIES, ids=lambda repository: repository.__name__)
def test_repository_methods_are_aot_processed(repository, aot_output: Path) -> None:
    contract = contract_from_repository(repository)
    validate(contract, metadata_location(aot_output, contract))
