from pathlib import Path

import pytest

from coverage_diff.config import ConfigHelper, default_config, update

SAMPLES_DIR = Path(__file__).parent / "samples"
WORKSPACE = "/home/runner/work/app"


@pytest.fixture
def mock_configuration(mocker):
    m = mocker.patch("coverage_diff.config._get_config_instance")
    mock_config = ConfigHelper()
    m.return_value = mock_config
    our_config = update(default_config, {"workspace": WORKSPACE})
    mock_config.set_params(our_config)
    return mock_config


@pytest.fixture
def sample_path():
    def _sample_path(name):
        return str(SAMPLES_DIR / name)

    return _sample_path


@pytest.fixture
def base_resultset_path(sample_path):
    return sample_path("resultset_base.json")


@pytest.fixture
def head_resultset_path(sample_path):
    return sample_path("resultset_head.json")


@pytest.fixture
def workspace():
    return WORKSPACE

