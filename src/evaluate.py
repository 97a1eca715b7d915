"""Binary-classification metrics for the held-out partition."""

import math
from dataclasses import dataclass

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    average_precision_score,
    f1_score,
    log_loss,
    precision_score,
    recall_score,
    roc_auc_score,
)

from errors import EvaluationError

THRESHOLD = 0.5

# label printed for each field, in report order
REPORT_FIELDS = (
    ("Accuracy", "accuracy"),
    ("Auc", "auc_roc"),
    ("Auprc", "auc_pr"),
    ("F1Score", "f1"),
    ("LogLoss", "log_loss"),
    ("LogLossReduction", "log_loss_reduction"),
    ("PositivePrecision", "positive_precision"),
    ("PositiveRecall", "positive_recall"),
    ("NegativePrecision", "negative_precision"),
    ("NegativeRecall", "negative_recall"),
)


@dataclass(frozen=True)
class MetricsReport:
    accuracy: float
    auc_roc: float
    auc_pr: float
    f1: float
    log_loss: float
    log_loss_reduction: float
    positive_precision: float
    positive_recall: float
    negative_precision: float
    negative_recall: float
    n_samples: int
    n_positive: int


def prior_log_loss(y_true: np.ndarray) -> float:
    """Log-loss of a predictor that always outputs the positive rate."""
    p = float(np.mean(y_true))
    if p <= 0.0 or p >= 1.0:
        return 0.0
    return -(p * math.log(p) + (1.0 - p) * math.log(1.0 - p))


def evaluate_binary(y_true, y_prob, threshold: float = THRESHOLD) -> MetricsReport:
    y_true = np.asarray(y_true).astype(int)
    y_prob = np.asarray(y_prob, dtype=float)
    if y_true.shape != y_prob.shape:
        raise EvaluationError(f"Label/score length mismatch: {y_true.shape} vs {y_prob.shape}")
    if len(y_true) == 0:
        raise EvaluationError("Test partition is empty")
    if len(np.unique(y_true)) < 2:
        raise EvaluationError(
            "Test partition contains a single class; AUC is undefined. "
            "Use a larger dataset or a stratified split."
        )

    y_pred = (y_prob >= threshold).astype(int)

    ll = log_loss(y_true, y_prob, labels=[0, 1])
    prior = prior_log_loss(y_true)

    return MetricsReport(
        accuracy=float(accuracy_score(y_true, y_pred)),
        auc_roc=float(roc_auc_score(y_true, y_prob)),
        auc_pr=float(average_precision_score(y_true, y_prob)),
        # 0.0 when positive precision and recall are both 0
        f1=float(f1_score(y_true, y_pred, pos_label=1, zero_division=0)),
        log_loss=float(ll),
        log_loss_reduction=float(1.0 - ll / prior),
        positive_precision=float(precision_score(y_true, y_pred, pos_label=1, zero_division=0)),
        positive_recall=float(recall_score(y_true, y_pred, pos_label=1, zero_division=0)),
        negative_precision=float(precision_score(y_true, y_pred, pos_label=0, zero_division=0)),
        negative_recall=float(recall_score(y_true, y_pred, pos_label=0, zero_division=0)),
        n_samples=int(len(y_true)),
        n_positive=int(y_true.sum()),
    )


def format_report(report: MetricsReport) -> str:
    width = max(len(name) for name, _ in REPORT_FIELDS) + 2
    lines = ["Model metrics:"]
    for name, attr in REPORT_FIELDS:
        lines.append(f"  {(name + ':').ljust(width)}{getattr(report, attr)}")
    return "\n".join(lines)
