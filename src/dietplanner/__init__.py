"""Search for food quantities that meet daily nutrient targets."""

__version__ = "0.1.0"
