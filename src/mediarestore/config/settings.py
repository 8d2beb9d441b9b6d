"""Where: src/mediarestore/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
Trade-offs: - Validation is limited to simple boundary checks.
"""

from __future__ import annotations

from mediarestore.config.config import (
    BATCH_SIZE_DEFAULT,
    PROBE_TIMEOUT_SECONDS_DEFAULT,
    SEARCH_MAX_DEPTH_DEFAULT,
    TIMESTAMP_TOLERANCE_MS_DEFAULT,
    VALIDITY_THRESHOLD_DEFAULT,
    config as app_config,
)

# Integrity validation --------------------------------------------------------

_threshold = getattr(app_config, "validity_threshold", VALIDITY_THRESHOLD_DEFAULT)
VALIDITY_THRESHOLD: float = (
    float(_threshold)
    if isinstance(_threshold, (int, float)) and 0.0 <= _threshold <= 1.0
    else VALIDITY_THRESHOLD_DEFAULT
)

# Penalties subtracted from a perfect score per mismatching attribute.
NAME_MISMATCH_PENALTY: float = 0.3
SIZE_MISMATCH_PENALTY: float = 0.5
TIMESTAMP_MISMATCH_PENALTY: float = 0.1

_tolerance = getattr(app_config, "timestamp_tolerance_ms", TIMESTAMP_TOLERANCE_MS_DEFAULT)
TIMESTAMP_TOLERANCE_MS: int = (
    _tolerance if isinstance(_tolerance, int) and _tolerance >= 0 else TIMESTAMP_TOLERANCE_MS_DEFAULT
)

# Candidate search and batching ------------------------------------------------

_depth = getattr(app_config, "search_max_depth", SEARCH_MAX_DEPTH_DEFAULT)
SEARCH_MAX_DEPTH: int = _depth if isinstance(_depth, int) and _depth >= 0 else SEARCH_MAX_DEPTH_DEFAULT

_batch = getattr(app_config, "batch_size", BATCH_SIZE_DEFAULT)
BATCH_SIZE: int = _batch if isinstance(_batch, int) and _batch > 0 else BATCH_SIZE_DEFAULT

# Filesystem probe --------------------------------------------------------------

_timeout = getattr(app_config, "probe_timeout_seconds", PROBE_TIMEOUT_SECONDS_DEFAULT)
PROBE_TIMEOUT_SECONDS: float = (
    float(_timeout)
    if isinstance(_timeout, (int, float)) and _timeout > 0
    else PROBE_TIMEOUT_SECONDS_DEFAULT
)


__all__ = [
    "VALIDITY_THRESHOLD",
    "NAME_MISMATCH_PENALTY",
    "SIZE_MISMATCH_PENALTY",
    "TIMESTAMP_MISMATCH_PENALTY",
    "TIMESTAMP_TOLERANCE_MS",
    "SEARCH_MAX_DEPTH",
    "BATCH_SIZE",
    "PROBE_TIMEOUT_SECONDS",
]
