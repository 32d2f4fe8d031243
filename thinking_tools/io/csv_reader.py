# thinking_tools/io/csv_reader.py
from __future__ import annotations
from pathlib import Path
from typing import Iterator
import pandas as pd

from thinking_tools.core.errors import FileReadError, EmptyDatasetError
from thinking_tools.core.types import Record, Dataset

CHUNK_ROWS = 1000


def read_records(path: str | Path, chunksize: int = CHUNK_ROWS) -> Iterator[Record]:
    """Stream a CSV file and yield one {column: text} record per data row.

    Single pass; nothing is opened until the first record is requested.
    Cells are kept as text (no dtype inference, no NA conversion). A row
    with more fields than the header is a FileReadError; missing trailing
    fields read as "".
    """
    p = Path(path)
    try:
        # header=None: the header is just the first row, so the tokenizer
        # rejects longer rows instead of treating the extra field as an index
        reader = pd.read_csv(
            p,
            header=None,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            chunksize=chunksize,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        # ヘッダすら無いファイル
        return
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise FileReadError(f"Cannot read CSV file '{path}': {e}") from e
    header: list[str] | None = None
    try:
        with reader:
            for chunk in reader:
                rows = chunk.fillna("").itertuples(index=False, name=None)
                if header is None:
                    header = [str(c) for c in next(rows)]
                for row in rows:
                    yield dict(zip(header, row))
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise FileReadError(f"Cannot read CSV file '{path}': {e}") from e


def load_dataset(path: str | Path) -> Dataset:
    records = list(read_records(path))
    if not records:
        raise EmptyDatasetError(f"CSV file '{path}' is empty or could not be parsed")
    return Dataset(columns=list(records[0].keys()), records=records)
