# src/xml_kit/observability/names.py

"""Standard metric names for xml-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Transform Metrics
# ============================================================================

# Duration (recorded once the record stream is exhausted)
TRANSFORM_DURATION = "transform_duration"

# Counters
TRANSFORM_RECORDS_EMITTED = "transform_records_emitted"
TRANSFORM_HEADERS_EMITTED = "transform_headers_emitted"
TRANSFORM_ERRORS_TOTAL = "transform_errors_total"

# Gauges
TRANSFORM_MAX_DEPTH = "transform_max_depth"


# ============================================================================
# Mapping Table Metrics
# ============================================================================

# Duration
MAPPING_LOAD_DURATION = "mapping_load_duration"

# Counters
MAPPING_ROWS_LOADED = "mapping_rows_loaded"
MAPPING_ROWS_SKIPPED = "mapping_rows_skipped"
MAPPING_LOAD_ERRORS_TOTAL = "mapping_load_errors_total"


# ============================================================================
# Sink Metrics
# ============================================================================

# Duration
RENDER_DURATION = "render_duration"

# Counters
RENDER_RECORDS_TOTAL = "render_records_total"
