# roai/tests/conftest.py
#
# Test bootstrap for pytest: ensure repository root is on sys.path so tests can import
# the `roai` package without requiring an editable install.
#
# Fixture Organization:
# - This file: core fixtures (repo_root, the reference initiative, risk inputs,
#   the seed example submission)
# - tests/fixtures/: YAML initiative files used by intake and CLI tests
#
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from loguru import logger


def _find_repo_root(start: Path | None = None) -> Path:
    """
    Walk upwards from `start` (defaults to this file's parent) until a likely
    repository root is found: a directory containing pyproject.toml or .git.

    Falls back to one level up from this file if nothing is found.
    """
    if start is None:
        start = Path(__file__).resolve().parent

    current = start
    while True:
        for marker in ("pyproject.toml", ".git"):
            if (current / marker).exists():
                return current
        if current.parent == current:
            break
        current = current.parent

    return Path(__file__).resolve().parents[1]


_repo_root = _find_repo_root()
_repo_root_str = str(_repo_root)

if _repo_root_str not in sys.path:
    sys.path.insert(0, _repo_root_str)

# Configure test logging using loguru for consistency with application code
logger.remove()
logger.add(
    sys.stderr,
    level="INFO",
    format="{time:YYYY-MM-DD HH:mm:ss} {level} {name}: {message}",
)


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers",
        "fast: Fast unit tests that should complete in < 1 second",
    )
    config.addinivalue_line(
        "markers",
        "slow: Slow tests that may take > 1 second to complete",
    )
    config.addinivalue_line(
        "markers",
        "unit: Pure unit tests with no I/O",
    )


@pytest.fixture(scope="session")
def repo_root() -> Path:
    """Return the repository root Path for tests that read project files."""
    return _repo_root


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def initiative_data():
    """Three-year initiative whose incremental flows are [-80000, 20000, 50000]."""
    from roai.models.initiative import InitiativeData

    return InitiativeData.from_amounts(
        costs=[100000, 50000, 50000],
        benefits=[0, 80000, 120000],
        cf_costs=[20000, 20000, 20000],
        cf_benefits=[0, 30000, 40000],
        horizon_years=3,
        discount_rate=0.10,
    )


@pytest.fixture
def risk_data():
    """Risk inputs with moderate probabilities and every rating at 2."""
    from roai.models.initiative import RiskData

    return RiskData(p_success=0.8, p_adoption=0.7, data_risk=2, regulatory_risk=2, vendor_risk=2)


@pytest.fixture
def support_copilot_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "customer_support_copilot.yaml"


@pytest.fixture
def support_copilot_payload(support_copilot_path: Path) -> dict:
    """Raw mapping for the customer support copilot example initiative."""
    import yaml

    with open(support_copilot_path, encoding="utf-8") as f:
        return yaml.safe_load(f)
