import pytest

from autostat.schemas import ParamConfig, InternalConfig, UserConfig
from autostat.schemas.resolve import resolve_config
from autostat.setup_directories import setup_output_directories


@pytest.fixture
def pipeline_config() -> InternalConfig:
    """InternalConfig for pipeline tests: bundled sample, low-resolution plots."""
    user = UserConfig(visualization={"dpi": 60, "figsize": (4.0, 3.0)})
    return resolve_config(ParamConfig(), user, None)


@pytest.fixture
def make_pipeline_config():
    """Factory for pipeline configs with extra user overrides."""
    def _make(**user_overrides):
        user_overrides.setdefault("visualization", {"dpi": 60, "figsize": (4.0, 3.0)})
        return resolve_config(ParamConfig(), UserConfig(**user_overrides), None)

    return _make


@pytest.fixture
def pipeline_output_dirs(temp_dir):
    """Output directories for pipeline tests."""
    return setup_output_directories(temp_dir)
