"""Pytest configuration - add project root to path, shared tables."""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))


@pytest.fixture
def site_age_table():
    """Stratified site x age-group table, 8 rows per stratum."""
    from src.randomization.generator import stratified_generate
    return stratified_generate(
        8,
        {"site": ["siteA", "siteB"], "age_group": ["<65", ">=65"]},
        seed=31,
    )
