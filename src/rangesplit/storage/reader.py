"""
Parquet-backed result reader and executor.

This module serves precomputed aggregate rows stored as Parquet files, one
directory per partition set, and exposes them through the Executor contract so
splits can be executed locally (tests, small deployments, replaying a job).

DATA LAYOUT
===========

    root_dir/
        cube_daily/
            part_0000.parquet
            part_0001.parquet
        cube_hourly/
            part_0000.parquet

Every file holds one row per aggregate group. The ``key`` column (binary) holds
the row's store key, the remaining columns are the aggregate values:

    key          impressions   clicks
    05 00 01     1200          31
    05 00 02     880           12
    06 00 01     4031          97


READ PATH
=========

STEP 1: List ``*.parquet`` files in the partition set directory, sorted by name.

STEP 2: Stream each file in batches (pyarrow.parquet.ParquetFile.iter_batches)
        so a split never holds the whole dataset in memory.

STEP 3: Keep rows whose key lies in the split's half-open range [start, end).
        An end of None means the range is unbounded on the right.


OUTPUT: row dictionaries ( or a pandas DataFrame via to_dataframe() )
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

import pandas as pd
import pyarrow.parquet as pq

from rangesplit.constants import DEFAULT_BATCH_SIZE

logger = logging.getLogger(__name__)


class ParquetReader:
    """
    Reads result rows from the Parquet files of one directory.

    Example:
        >>> reader = ParquetReader("data/cube_daily")
        >>>
        >>> # Stream rows of one key range
        >>> for row in reader.iter_rows(start=b"\\x05", end=b"\\x06"):
        ...     print(row)
        >>>
        >>> # Or load to DataFrame
        >>> df = reader.to_dataframe(start=b"\\x05")
    """

    def __init__(self, data_dir: Union[str, Path], key_column: str = "key"):
        """
        Initialize reader for a directory.

        Args:
            data_dir: Directory containing parquet files
            key_column: Name of the binary column holding row keys
        """
        self.data_dir = Path(data_dir)
        self.key_column = key_column

        if not self.data_dir.exists():
            raise FileNotFoundError(f"Data directory not found: {data_dir}")

        # May be empty if the partition set holds no rows yet
        self.parquet_files = sorted(self.data_dir.glob("*.parquet"))

    def iter_rows(
        self,
        start: bytes = b"",
        end: Optional[bytes] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> Iterator[Dict[str, Any]]:
        """
        Stream rows whose key falls in ``[start, end)``.

        Args:
            start: Inclusive lower key bound
            end: Exclusive upper key bound, None for unbounded
            batch_size: Number of rows to read per batch

        Yields:
            Row dictionaries
        """
        for parquet_file in self.parquet_files:
            parquet_file_obj = pq.ParquetFile(parquet_file)

            for batch in parquet_file_obj.iter_batches(batch_size=batch_size):
                for row in batch.to_pylist():
                    key = row[self.key_column]
                    if key < start:
                        continue
                    if end is not None and key >= end:
                        continue
                    yield row

    def to_dataframe(
        self, start: bytes = b"", end: Optional[bytes] = None
    ) -> pd.DataFrame:
        """Load rows of ``[start, end)`` into a DataFrame."""
        rows = list(self.iter_rows(start, end))
        if rows:
            return pd.DataFrame(rows)

        if self.parquet_files:
            columns = pq.read_schema(self.parquet_files[0]).names
        else:
            columns = [self.key_column]
        return pd.DataFrame(columns=columns)


class ParquetExecutor:
    """Executor over ``root_dir/<partition_set_id>/*.parquet``."""

    def __init__(
        self,
        root_dir: Union[str, Path],
        key_column: str = "key",
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        self.root_dir = Path(root_dir)
        self.key_column = key_column
        self.batch_size = batch_size

    def execute(
        self, start: bytes, end: Optional[bytes], partition_set_id: str
    ) -> Iterator[Dict[str, Any]]:
        reader = ParquetReader(self.root_dir / partition_set_id, key_column=self.key_column)
        logger.debug(
            "Executing %s over %d parquet files",
            partition_set_id,
            len(reader.parquet_files),
        )
        return reader.iter_rows(start, end, batch_size=self.batch_size)
