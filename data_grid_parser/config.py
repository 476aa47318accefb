"""Runtime settings, read once from the environment."""
from __future__ import annotations

import os

# Deepest nesting accepted from either input format.
MAX_DEPTH = int(os.getenv("DATA_GRID_MAX_DEPTH", "256"))

# "collect" turns same-named sibling XML elements into a list,
# "last" keeps only the final sibling.
XML_REPEATED_TAGS = os.getenv("DATA_GRID_XML_REPEATED_TAGS", "collect").strip().lower()

# Key used to wrap root items that are not mappings.
SCALAR_ITEM_KEY = os.getenv("DATA_GRID_SCALAR_KEY", "value")

FETCH_TIMEOUT = float(os.getenv("DATA_GRID_FETCH_TIMEOUT", "30"))
MAX_FETCH_BYTES = int(os.getenv("DATA_GRID_MAX_FETCH_BYTES", str(20 * 1024 * 1024)))

LOG_LEVEL = os.getenv("DATA_GRID_LOG_LEVEL", "INFO").upper()

# Rows rendered in the UI grid; filtering and sorting always see every row.
PREVIEW_ROWS = int(os.getenv("DATA_GRID_PREVIEW_ROWS", "500"))
