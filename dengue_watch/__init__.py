"""Weekly weather and dengue feature aggregation for PSGC administrative areas."""

__version__ = "1.0.0"
