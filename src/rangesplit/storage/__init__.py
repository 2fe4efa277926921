"""
Local storage backends: Parquet result rows and static partition metadata.
"""

from rangesplit.storage.metadata import StaticPartitionMetadata
from rangesplit.storage.reader import ParquetExecutor, ParquetReader

__all__ = [
    "ParquetReader",
    "ParquetExecutor",
    "StaticPartitionMetadata",
]
