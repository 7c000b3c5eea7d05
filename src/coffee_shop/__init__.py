"""Coffee shop catalog service.

A small FastAPI service exposing a catalog of coffees backed by MongoDB,
with a bulk import path from a seed file and an optional request audit trail.
"""

__version__ = "0.1.0"
