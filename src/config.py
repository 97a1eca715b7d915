import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from errors import ConfigurationError

# The raw Class field is quoted in the source CSV and the loader keeps the
# quotes, so the fraud token is the three characters "1" including quotes.
FRAUD_LABEL_TOKEN = '"1"'

ENV_PREFIX = "CCFRAUD_"

# numpy RandomState and xgboost random_state take 32-bit seeds only
MAX_SEED = 2**32 - 1


@dataclass(frozen=True)
class Paths:
    data_path: str = "creditcard.csv"


@dataclass(frozen=True)
class LoadConfig:
    sep: str = ","
    has_header: bool = True


@dataclass(frozen=True)
class SplitConfig:
    # fraction of rows held out for evaluation, random (not time-sorted)
    test_frac: float = 0.20
    seed: int = 42
    stratify: bool = False


@dataclass(frozen=True)
class FeatureConfig:
    # Amount stays out of the feature vector unless explicitly enabled
    include_amount: bool = False
    fraud_label_token: str = FRAUD_LABEL_TOKEN


@dataclass(frozen=True)
class RunConfig:
    paths: Paths = field(default_factory=Paths)
    load: LoadConfig = field(default_factory=LoadConfig)
    split: SplitConfig = field(default_factory=SplitConfig)
    features: FeatureConfig = field(default_factory=FeatureConfig)
    wait_for_key: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RunConfig":
        env = os.environ if environ is None else environ
        cfg = cls()

        data_path = env.get(ENV_PREFIX + "DATA_PATH")
        if data_path:
            cfg = replace(cfg, paths=replace(cfg.paths, data_path=data_path))

        split_cfg = cfg.split
        if env.get(ENV_PREFIX + "TEST_FRAC"):
            split_cfg = replace(split_cfg, test_frac=_parse_float("test_frac", env[ENV_PREFIX + "TEST_FRAC"]))
        if env.get(ENV_PREFIX + "SEED"):
            split_cfg = replace(split_cfg, seed=_parse_int("seed", env[ENV_PREFIX + "SEED"]))

        feat_cfg = cfg.features
        if env.get(ENV_PREFIX + "INCLUDE_AMOUNT"):
            feat_cfg = replace(
                feat_cfg, include_amount=_parse_bool("include_amount", env[ENV_PREFIX + "INCLUDE_AMOUNT"])
            )
        if ENV_PREFIX + "FRAUD_TOKEN" in env:
            feat_cfg = replace(feat_cfg, fraud_label_token=env[ENV_PREFIX + "FRAUD_TOKEN"])

        wait = cfg.wait_for_key
        if env.get(ENV_PREFIX + "NO_WAIT"):
            wait = not _parse_bool("no_wait", env[ENV_PREFIX + "NO_WAIT"])

        return replace(cfg, split=split_cfg, features=feat_cfg, wait_for_key=wait)

    def validate(self) -> "RunConfig":
        if not self.paths.data_path:
            raise ConfigurationError("data_path", self.paths.data_path, "must not be empty")
        if not self.load.sep:
            raise ConfigurationError("sep", self.load.sep, "must not be empty")
        test_frac = self.split.test_frac
        if not 0.0 < test_frac < 1.0:
            raise ConfigurationError("test_frac", test_frac, "must lie strictly between 0 and 1")
        if not 0 <= self.split.seed <= MAX_SEED:
            raise ConfigurationError("seed", self.split.seed, f"must be an integer between 0 and {MAX_SEED}")
        if not self.features.fraud_label_token:
            raise ConfigurationError("fraud_label_token", self.features.fraud_label_token, "must not be empty")
        return self


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(name, raw, "expected a boolean (true/false, 1/0, yes/no, on/off)")


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(name, raw, "expected a number") from None


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(name, raw, "expected an integer") from None
