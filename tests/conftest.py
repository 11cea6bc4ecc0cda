"""
Pytest configuration and shared fixtures.
"""

import os
import pytest
import json
from pathlib import Path

from shortlist.dictionary import DEFAULT_SEED, WeightedDictionary
from shortlist.logger import StructuredLogger, reset_logger
from shortlist.scoring import ScoringPipeline


SHORTLIST_ENV_VARS = (
    "SHORTLIST_SEED_PATH",
    "SHORTLIST_SEED_DB",
    "SHORTLIST_MAX_INPUT_CHARS",
    "SHORTLIST_LOG_LEVEL",
    "SHORTLIST_LOG_DIR",
)


@pytest.fixture(autouse=True)
def fresh_global_logger(monkeypatch):
    """Each test gets its own global logger and a clean SHORTLIST_* env."""
    for var in SHORTLIST_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_logger()
    yield
    reset_logger()
    # load_env() writes os.environ directly
    for var in SHORTLIST_ENV_VARS:
        os.environ.pop(var, None)


@pytest.fixture
def dictionary() -> WeightedDictionary:
    """Dictionary built from the default seed."""
    return WeightedDictionary.build(DEFAULT_SEED)


@pytest.fixture
def quiet_logger(tmp_path) -> StructuredLogger:
    """Logger that writes only to a temp log file."""
    return StructuredLogger(
        name="shortlist.test",
        level="DEBUG",
        log_dir=tmp_path / "logs",
        enable_console=False,
    )


@pytest.fixture
def pipeline(dictionary, quiet_logger) -> ScoringPipeline:
    return ScoringPipeline(dictionary, logger=quiet_logger)


@pytest.fixture
def seed_file(tmp_path) -> Path:
    """JSON seed file in list form."""
    path = tmp_path / "seed.json"
    data = {
        "skills": [
            {"keyword": "Rust", "weight": 9},
            {"keyword": "kubernetes", "weight": 4},
        ]
    }
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def invalid_seed_file(tmp_path) -> Path:
    """Seed with a duplicate keyword and a negative weight."""
    path = tmp_path / "bad_seed.json"
    data = {
        "skills": [
            {"keyword": "python", "weight": 7},
            {"keyword": "PYTHON", "weight": 3},
            {"keyword": "go", "weight": -1},
        ]
    }
    path.write_text(json.dumps(data))
    return path
