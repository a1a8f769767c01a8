"""Transformations from raw source tables to report tables."""
