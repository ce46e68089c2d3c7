"""Domain records and static reference data."""
