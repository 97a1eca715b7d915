import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple

from xgboost import XGBClassifier

from config import FeatureConfig
from ingest import LABEL_SOURCE_COLUMN, PCA_COLUMNS

LABEL_COLUMN = "Label"
AMOUNT_COLUMN = "Amount"

Transform = Callable[[pd.DataFrame], pd.DataFrame]


def feature_columns(include_amount: bool = False) -> Tuple[str, ...]:
    # V1..V28 keep their order; Amount can only be appended
    if include_amount:
        return PCA_COLUMNS + (AMOUNT_COLUMN,)
    return PCA_COLUMNS


def label_mapping(token: str) -> Transform:
    """Exact string match against the raw Class token, no numeric parse."""

    def _map(df: pd.DataFrame) -> pd.DataFrame:
        out = df.copy()
        out[LABEL_COLUMN] = out[LABEL_SOURCE_COLUMN].astype(str) == token
        return out

    return _map


def select_features(columns: Tuple[str, ...]) -> Transform:
    def _select(df: pd.DataFrame) -> pd.DataFrame:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise KeyError(f"Missing feature columns: {missing}")
        keep = list(columns)
        if LABEL_COLUMN in df.columns:
            keep.append(LABEL_COLUMN)
        return df[keep].copy()

    return _select


@dataclass(frozen=True)
class FraudPipeline:
    steps: Tuple[Tuple[str, Transform], ...]
    features: Tuple[str, ...]
    estimator_params: Dict = field(default_factory=dict)

    def apply(self, df: pd.DataFrame) -> pd.DataFrame:
        out = df
        for _, step in self.steps:
            out = step(out)
        return out

    def transform(self, df: pd.DataFrame) -> Tuple[np.ndarray, np.ndarray]:
        out = self.apply(df)
        X = out[list(self.features)].to_numpy(dtype=np.float32)
        y = out[LABEL_COLUMN].to_numpy(dtype=bool)
        return X, y

    def make_estimator(self) -> XGBClassifier:
        return XGBClassifier(**self.estimator_params)


def build_pipeline(feat_cfg: FeatureConfig, seed: int = 42, n_jobs: int = -1) -> FraudPipeline:
    cols = feature_columns(feat_cfg.include_amount)
    steps = (
        ("LabelMapping", label_mapping(feat_cfg.fraud_label_token)),
        ("Features", select_features(cols)),
    )
    # Library defaults for the boosting hyperparameters
    params = {
        "objective": "binary:logistic",
        "random_state": seed,
        "n_jobs": n_jobs,
    }
    return FraudPipeline(steps=steps, features=cols, estimator_params=params)
