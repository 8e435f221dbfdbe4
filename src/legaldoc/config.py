"""Local configuration for legaldoc."""

from __future__ import annotations

import os


DEFAULT_FIRST_PAGE_CAPACITY = 220.0
DEFAULT_PAGE_CAPACITY = 250.0
DEFAULT_CITY = "Phuket"
DEFAULT_LOG_LEVEL = "INFO"

# Page capacities are in the same units as the height estimator (mm of A4 content area).
LEGALDOC_FIRST_PAGE_CAPACITY = float(os.getenv("LEGALDOC_FIRST_PAGE_CAPACITY", str(DEFAULT_FIRST_PAGE_CAPACITY)))
LEGALDOC_PAGE_CAPACITY = float(os.getenv("LEGALDOC_PAGE_CAPACITY", str(DEFAULT_PAGE_CAPACITY)))
LEGALDOC_DEFAULT_CITY = os.getenv("LEGALDOC_DEFAULT_CITY", DEFAULT_CITY)
LEGALDOC_LOG_LEVEL = os.getenv("LEGALDOC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
