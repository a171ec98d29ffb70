import os
import sys
from glob import glob
from typing import List

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tests.test_util import DATA_DIR, open_file  # isort:skip


@pytest.fixture(scope="session")
def closures_program() -> str:
    return open_file(os.path.join(DATA_DIR, "valid", "closures.pratt"))


@pytest.fixture(scope="session")
def fibonacci_program() -> str:
    return open_file(os.path.join(DATA_DIR, "valid", "fibonacci.pratt"))


def valid_files() -> List[str]:
    return sorted(glob(os.path.join(DATA_DIR, "valid", "*.pratt")))


def invalid_files() -> List[str]:
    return sorted(glob(os.path.join(DATA_DIR, "invalid", "*.pratt")))


@pytest.fixture(scope="session", params=valid_files() + invalid_files())
def file(request) -> str:
    return request.param


@pytest.fixture(scope="session", params=valid_files())
def valid_file(request) -> str:
    return request.param


@pytest.fixture(scope="session", params=invalid_files())
def invalid_file(request) -> str:
    return request.param
