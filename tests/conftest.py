"""Root-level pytest fixtures for the autostat test suite.

Provides shared configuration fixtures following Pydantic-based architecture.
All tests must use these fixtures instead of creating raw dict configs.
"""

import pytest
from pathlib import Path
import tempfile
import shutil

import numpy as np

from autostat.schemas import ParamConfig, UserConfig, resolve_config
from tests.helpers.fake_cars import make_cars


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults.

    Use this as the base for all test configs. Override specific values
    using user_config or by creating custom UserConfig instances.
    """
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides).

    Use this when tests don't care about specific config values and just
    need a valid InternalConfig to pass to constructors.
    """
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_custom_top_n(make_config):
    ...     config = make_config(top_n=3)
    ...     assert config.ranking.top_n == 3
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        else:
            return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def output_dirs(temp_dir):
    """Standard autostat output directory structure.

    Returns dict with keys: base, reports, plots, logs
    All directories are created and cleaned up automatically.
    """
    dirs = {
        "base": temp_dir,
        "reports": temp_dir / "reports",
        "plots": temp_dir / "plots",
        "logs": temp_dir / "logs",
    }

    for d in dirs.values():
        d.mkdir(parents=True, exist_ok=True)

    return dirs


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def cars_df():
    """Small mixed-origin table covering every tier boundary and a missing value."""
    return make_cars([
        ("Chevrolet", "Corvette", "Sports", "USA", 350, 3500, 18, 26),
        ("Dodge", "Viper", "Sports", "USA", 500, 3410, 12, 20),
        ("Ford", "Mustang", "Sports", "USA", 300, 3300, 17, 25),
        ("Ford", "Taurus", "Sedan", "USA", 200, 3300, 20, 28),
        ("Cadillac", "CTS", "Sedan", "USA", 255, 3700, 18, 25),
        ("Chevrolet", "Tahoe", "SUV", "USA", 295, 5000, 14, np.nan),
        ("GMC", "Yukon", "SUV", "USA", 400, 6000, 13, 17),
        ("Porsche", "911", "Sports", "Germany", 500, 3100, 17, 24),
        ("BMW", "M3", "Sports", "Germany", 333, 3415, 16, 24),
        ("Honda", "Civic", "Sedan", "Japan", 115, 2432, 32, 38),
        ("Toyota", "Camry", "Sedan", "Japan", 157, 3086, 24, 33),
        ("Audi", "A4", "Sedan", "Germany", 170, 3252, 22, 31),
    ])


@pytest.fixture
def cars_csv(temp_dir, cars_df):
    """cars_df written to a CSV file."""
    path = temp_dir / "cars.csv"
    cars_df.to_csv(path, index=False)
    return path
