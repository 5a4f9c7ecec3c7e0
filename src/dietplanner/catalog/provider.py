"""Process-wide catalog access."""

from functools import lru_cache

from dietplanner.catalog.models import Catalog
from dietplanner.catalog.sr26 import load_sr26_catalog
from dietplanner.config import get_settings


@lru_cache
def get_catalog() -> Catalog:
    """Load the SR26 catalog from the configured directory, once per process."""
    return load_sr26_catalog(get_settings().usda_data_dir)
