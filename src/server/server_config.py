"""Configuration for the preview server."""

from __future__ import annotations

import os

APP_TITLE = "legaldoc preview"
APP_DESCRIPTION = "Number, serialize and paginate agreement structures."

# Upper bound on nodes accepted in one request; agreements have tens of clauses.
MAX_STRUCTURE_NODES = int(os.getenv("MAX_STRUCTURE_NODES", "2000"))
