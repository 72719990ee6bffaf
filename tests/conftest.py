"""Pytest configuration and shared fixtures for the long multiplication tests."""

import os
import shutil
import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Add project root and src to Python path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)
sys.path.insert(0, os.path.join(ROOT, "src"))

from long_multiplication.engine import compute  # noqa: E402

# 14 x 23, rendered without labels
BLOCK_23_X_14 = (
    "   14\n"
    "x  23\n"
    "=====\n"
    "   32\n"
    "+  10\n"
    "=  42\n"
    "-----\n"
    "  28 \n"
    "+  0 \n"
    "= 28 \n"
    "=====\n"
    "+ 280\n"
    "-----\n"
    "= 322\n"
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def sample_config(temp_dir):
    """Create a sample configuration file for testing."""
    config = {
        "limits": {"max_input_digits": 40, "max_result_digits": 40},
        "render": {"style": "steps", "annotate": False},
        "output": {"mode": "display", "output_dir": str(Path(temp_dir) / "output")},
        "server": {"host": "0.0.0.0", "port": 8123},
        "logging": {"level": "INFO", "db_path": str(Path(temp_dir) / "logs.db")},
    }

    config_path = Path(temp_dir) / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)

    return config_path


@pytest.fixture
def computation_23x14():
    """Computation for multiplier 23 and multiplicand 14."""
    return compute("23", "14")


@pytest.fixture
def block_23x14():
    """Expected unannotated rendering of 23 x 14."""
    return BLOCK_23_X_14
