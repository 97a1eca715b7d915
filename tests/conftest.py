"""
Shared fixtures: synthetic creditcard.csv files written to tmp_path.

The files mimic the real dataset's encoding: numeric fields unquoted,
header names and the Class field quoted.
"""

import numpy as np
import pytest

HEADER = ",".join(f'"{c}"' for c in ["Time"] + [f"V{i}" for i in range(1, 29)] + ["Amount", "Class"])


def make_rows(n_rows, fraud_rate=0.1, seed=0, signal=4.0):
    """Rows with a strong fraud signal on V1..V4 so a small model can learn it."""
    rng = np.random.RandomState(seed)
    n_fraud = int(round(n_rows * fraud_rate))
    labels = np.array([1] * n_fraud + [0] * (n_rows - n_fraud))
    rng.shuffle(labels)

    rows = []
    for i, label in enumerate(labels):
        v = rng.normal(0.0, 1.0, 28)
        if label:
            v[:4] += signal
        amount = rng.uniform(1.0, 500.0)
        fields = [f"{float(i)}"] + [f"{x:.6f}" for x in v] + [f"{amount:.2f}", f'"{label}"']
        rows.append(",".join(fields))
    return rows


def write_csv(path, rows, header=True):
    lines = ([HEADER] if header else []) + list(rows)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def small_csv(tmp_path):
    """100 rows, 10% fraud."""
    return write_csv(tmp_path / "creditcard.csv", make_rows(100, fraud_rate=0.1, seed=7))


@pytest.fixture
def csv_factory(tmp_path):
    def _make(name="data.csv", rows=None, header=True):
        return write_csv(tmp_path / name, rows if rows is not None else make_rows(20), header=header)

    return _make
