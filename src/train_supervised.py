import argparse
import logging
import sys
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from xgboost import XGBClassifier

from config import RunConfig
from errors import FraudModelError, TrainingError
from evaluate import MetricsReport, THRESHOLD, evaluate_binary, format_report
from features import FraudPipeline, build_pipeline
from ingest import LABEL_SOURCE_COLUMN, load_transactions
from reporting import ConsoleReporter, NullReporter, ProgressReporter
from split import random_split

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class TrainedModel:
    pipeline: FraudPipeline
    estimator: XGBClassifier

    def score(self, X: np.ndarray) -> np.ndarray:
        return self.estimator.predict_proba(X)[:, 1]

    def predict_proba(self, df: pd.DataFrame) -> np.ndarray:
        X, _ = self.pipeline.transform(df)
        return self.score(X)

    def predict(self, df: pd.DataFrame, threshold: float = THRESHOLD) -> Tuple[np.ndarray, np.ndarray]:
        prob = self.predict_proba(df)
        return prob, prob >= threshold


def train_model(pipeline: FraudPipeline, train_df: pd.DataFrame) -> TrainedModel:
    X_train, y_train = pipeline.transform(train_df)

    if len(y_train) == 0:
        raise TrainingError("Train partition is empty")
    pos = int(y_train.sum())
    if pos == 0 or pos == len(y_train):
        raise TrainingError(
            f"Train partition holds a single class ({pos} fraud of {len(y_train)} rows)"
        )
    logger.info("Fitting on %d rows (%d fraud, %.4f%%)", len(y_train), pos, 100.0 * pos / len(y_train))

    estimator = pipeline.make_estimator()
    try:
        estimator.fit(X_train, y_train.astype(int))
    except Exception as exc:
        raise TrainingError(f"Model fit failed: {exc}") from exc

    return TrainedModel(pipeline=pipeline, estimator=estimator)


def run(cfg: RunConfig, reporter: Optional[ProgressReporter] = None) -> Tuple[TrainedModel, MetricsReport]:
    reporter = reporter if reporter is not None else NullReporter()
    cfg.validate()

    reporter.start("Loading data...")
    df = load_transactions(cfg.paths.data_path, sep=cfg.load.sep, has_header=cfg.load.has_header)
    reporter.finish()

    reporter.start("Building pipeline...")
    pipeline = build_pipeline(cfg.features, seed=cfg.split.seed)
    reporter.finish()

    reporter.start("Training the model...")
    train_df, test_df = random_split(
        df,
        cfg.split.test_frac,
        cfg.split.seed,
        stratify_col=LABEL_SOURCE_COLUMN if cfg.split.stratify else None,
    )
    logger.info("Split %d rows into train=%d test=%d", len(df), len(train_df), len(test_df))

    model = train_model(pipeline, train_df)
    X_test, y_test = pipeline.transform(test_df)
    prob = model.score(X_test)
    metrics = evaluate_binary(y_test, prob)
    reporter.finish()

    reporter.line()
    for text in format_report(metrics).splitlines():
        reporter.line(text)
    reporter.line()

    return model, metrics


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train a gradient-boosted fraud classifier on creditcard.csv and print metrics"
    )
    parser.add_argument("--data-path", default=None, help="input CSV (default: creditcard.csv)")
    parser.add_argument("--sep", default=None, help="field delimiter (default: ,)")
    parser.add_argument("--no-header", action="store_true", help="input has no header row")
    parser.add_argument("--test-frac", type=float, default=None, help="held-out fraction (default: 0.2)")
    parser.add_argument("--seed", type=int, default=None, help="random seed for split and booster")
    parser.add_argument("--stratify", action="store_true", help="stratify the split on the label")
    parser.add_argument("--include-amount", action="store_true", help="append Amount to the features")
    parser.add_argument("--fraud-token", default=None, help='raw Class token meaning fraud (default: "1")')
    parser.add_argument("--no-wait", action="store_true", help="exit without waiting for enter")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def config_from_args(args: argparse.Namespace, base: RunConfig) -> RunConfig:
    cfg = base
    if args.data_path:
        cfg = replace(cfg, paths=replace(cfg.paths, data_path=args.data_path))
    if args.sep is not None:
        cfg = replace(cfg, load=replace(cfg.load, sep=args.sep))
    if args.no_header:
        cfg = replace(cfg, load=replace(cfg.load, has_header=False))

    split_cfg = cfg.split
    if args.test_frac is not None:
        split_cfg = replace(split_cfg, test_frac=args.test_frac)
    if args.seed is not None:
        split_cfg = replace(split_cfg, seed=args.seed)
    if args.stratify:
        split_cfg = replace(split_cfg, stratify=True)

    feat_cfg = cfg.features
    if args.include_amount:
        feat_cfg = replace(feat_cfg, include_amount=True)
    if args.fraud_token is not None:
        feat_cfg = replace(feat_cfg, fraud_label_token=args.fraud_token)

    cfg = replace(cfg, split=split_cfg, features=feat_cfg)
    if args.no_wait:
        cfg = replace(cfg, wait_for_key=False)
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    reporter = ConsoleReporter()
    try:
        cfg = config_from_args(args, RunConfig.from_env())
        run(cfg, reporter)
    except (FraudModelError, FileNotFoundError) as exc:
        reporter.line()
        logger.error("%s: %s", type(exc).__name__, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if cfg.wait_for_key and sys.stdin.isatty():
        reporter.line("Press enter to finish")
        sys.stdin.readline()
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
