"""Static reference data."""
