import csv
import logging
import os
import re

import pandas as pd

from errors import DataFormatError

logger = logging.getLogger(__name__)

PCA_COLUMNS = tuple(f"V{i}" for i in range(1, 29))
FLOAT_COLUMNS = ("Time",) + PCA_COLUMNS + ("Amount",)
LABEL_SOURCE_COLUMN = "Class"
COLUMNS = FLOAT_COLUMNS + (LABEL_SOURCE_COLUMN,)

_PARSER_LINE = re.compile(r"in line (\d+)")


def load_transactions(path: str, sep: str = ",", has_header: bool = True) -> pd.DataFrame:
    """Read the transactions file into a frame with the 31 documented columns.

    Quoting is disabled so the Class field keeps its raw token (quotes
    included). Column names come from position, not from the header row.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Data file not found: {path}")

    first_line = 2 if has_header else 1

    try:
        raw = pd.read_csv(
            path,
            sep=sep,
            header=None,
            skiprows=1 if has_header else 0,
            dtype=str,
            quoting=csv.QUOTE_NONE,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        raise DataFormatError("file contains no data rows", line=first_line) from None
    except UnicodeDecodeError as exc:
        raise DataFormatError(f"input is not valid UTF-8: {exc}") from exc
    except pd.errors.ParserError as exc:
        # the parser counts file lines, header included
        match = _PARSER_LINE.search(str(exc))
        line = int(match.group(1)) if match else None
        raise DataFormatError(f"expected {len(COLUMNS)} columns: {exc}", line=line) from exc

    if raw.shape[1] != len(COLUMNS):
        raise DataFormatError(
            f"expected {len(COLUMNS)} columns, found {raw.shape[1]}", line=first_line
        )
    raw.columns = list(COLUMNS)

    # Short rows are padded with NaN by the parser
    short = raw.isna().any(axis=1) | (raw[LABEL_SOURCE_COLUMN] == "")
    if short.any():
        pos = int(short.to_numpy().nonzero()[0][0])
        raise DataFormatError(
            f"expected {len(COLUMNS)} columns, row is short or Class is empty", line=first_line + pos
        )

    df = pd.DataFrame(index=raw.index)
    for c in FLOAT_COLUMNS:
        values = pd.to_numeric(raw[c], errors="coerce")
        bad = values.isna() & (raw[c].str.strip().str.lower() != "nan")
        if bad.any():
            pos = int(bad.to_numpy().nonzero()[0][0])
            raise DataFormatError(
                f"cannot parse {raw[c].iloc[pos]!r} as float", line=first_line + pos, column=c
            )
        df[c] = values.astype(float)
    df[LABEL_SOURCE_COLUMN] = raw[LABEL_SOURCE_COLUMN].astype(str)

    logger.info("Loaded %d records from %s", len(df), path)
    return df
