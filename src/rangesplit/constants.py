"""
Shared constants for rangesplit.
"""

# Byte that follows the grouping-key prefix decides the rounding direction:
# high bit set rounds the boundary up to the next group, clear rounds down.
ROUND_UP_BIT = 0x80

# Rows per Parquet batch when streaming result rows
DEFAULT_BATCH_SIZE = 10_000

# Worker threads for stream_splits_to_callback()
DEFAULT_MAX_WORKERS = 4

# Flat property names used to hand a JobConfig to workers
PROP_QUERY = "rangesplit.query"
PROP_PARAM_NO = "rangesplit.paramno"
PROP_PARAM = "rangesplit.param."
