"""Tests for run configuration and environment overrides."""

import pytest

from config import FRAUD_LABEL_TOKEN, Paths, RunConfig, SplitConfig
from errors import ConfigurationError


def test_defaults():
    cfg = RunConfig()
    assert cfg.paths.data_path == "creditcard.csv"
    assert cfg.load.sep == ","
    assert cfg.load.has_header is True
    assert cfg.split.test_frac == 0.2
    assert cfg.split.stratify is False
    assert cfg.features.include_amount is False
    assert cfg.features.fraud_label_token == FRAUD_LABEL_TOKEN
    assert cfg.wait_for_key is True
    assert cfg.validate() is cfg


def test_from_env_overrides():
    env = {
        "CCFRAUD_DATA_PATH": "/data/cc.csv",
        "CCFRAUD_TEST_FRAC": "0.3",
        "CCFRAUD_SEED": "7",
        "CCFRAUD_INCLUDE_AMOUNT": "yes",
        "CCFRAUD_FRAUD_TOKEN": "1",
        "CCFRAUD_NO_WAIT": "true",
    }
    cfg = RunConfig.from_env(env)

    assert cfg.paths.data_path == "/data/cc.csv"
    assert cfg.split.test_frac == 0.3
    assert cfg.split.seed == 7
    assert cfg.features.include_amount is True
    assert cfg.features.fraud_label_token == "1"
    assert cfg.wait_for_key is False


def test_from_env_empty_environment_gives_defaults():
    assert RunConfig.from_env({}) == RunConfig()


@pytest.mark.parametrize(
    "env, parameter",
    [
        ({"CCFRAUD_TEST_FRAC": "abc"}, "test_frac"),
        ({"CCFRAUD_SEED": "1.5"}, "seed"),
        ({"CCFRAUD_INCLUDE_AMOUNT": "maybe"}, "include_amount"),
    ],
)
def test_from_env_bad_values(env, parameter):
    with pytest.raises(ConfigurationError) as excinfo:
        RunConfig.from_env(env)
    assert excinfo.value.parameter == parameter


@pytest.mark.parametrize("frac", [0.0, 1.0, 2.0, -0.5])
def test_validate_rejects_test_fraction(frac):
    cfg = RunConfig(split=SplitConfig(test_frac=frac))
    with pytest.raises(ConfigurationError) as excinfo:
        cfg.validate()
    assert excinfo.value.parameter == "test_frac"
    assert str(frac) in str(excinfo.value)


def test_validate_rejects_empty_path():
    with pytest.raises(ConfigurationError) as excinfo:
        RunConfig(paths=Paths(data_path="")).validate()
    assert excinfo.value.parameter == "data_path"


def test_validate_rejects_negative_seed():
    with pytest.raises(ConfigurationError):
        RunConfig(split=SplitConfig(seed=-1)).validate()


def test_validate_rejects_seed_above_32_bits():
    with pytest.raises(ConfigurationError) as excinfo:
        RunConfig(split=SplitConfig(seed=2**32)).validate()
    assert excinfo.value.parameter == "seed"
