import pandas as pd
from typing import Optional, Tuple

from sklearn.model_selection import train_test_split

from config import MAX_SEED
from errors import ConfigurationError


def random_split(df: pd.DataFrame, test_frac: float, seed: int, stratify_col: Optional[str] = None
                 ) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Seeded random train/test partition.

    The test partition holds ceil(test_frac * len(df)) rows, the train
    partition the rest. Row order inside each partition follows the shuffle.
    """
    if not 0.0 < test_frac < 1.0:
        raise ConfigurationError("test_frac", test_frac, "must lie strictly between 0 and 1")
    if not 0 <= seed <= MAX_SEED:
        raise ConfigurationError("seed", seed, f"must lie between 0 and {MAX_SEED}")

    stratify = df[stratify_col] if stratify_col else None
    try:
        train, test = train_test_split(
            df, test_size=test_frac, random_state=seed, shuffle=True, stratify=stratify
        )
    except ValueError as exc:
        # too few rows (or too few per class) for the requested fraction
        raise ConfigurationError("test_frac", test_frac, str(exc)) from exc

    return train.copy(), test.copy()
