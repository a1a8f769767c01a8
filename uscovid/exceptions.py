"""Errors and warnings raised by the report pipeline."""


class FetchError(Exception):
    """An input file could not be downloaded or parsed."""


class SchemaMismatch(ValueError):
    """A table is missing identifier or date columns."""


class DataQualityWarning(UserWarning):
    """Suspicious source values that are reported but left in place."""


class JoinNullWarning(UserWarning):
    """Rows dropped because a join found no matching population."""
