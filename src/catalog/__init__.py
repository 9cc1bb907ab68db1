"""Static scholarship catalog."""

from src.catalog.scholarships import SCHOLARSHIPS, catalog_to_frame, get_catalog, get_scholarship, load_catalog

__all__ = ["SCHOLARSHIPS", "catalog_to_frame", "get_catalog", "get_scholarship", "load_catalog"]
