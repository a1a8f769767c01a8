"""Expected column layouts for the JHU tables.

Every table is checked against its schema as soon as it is loaded, so a
renamed or missing column fails the run instead of misaligning later joins.
"""

import logging
import re
from typing import Iterable, List, NamedTuple, Tuple

import pandas as pd

from uscovid.exceptions import SchemaMismatch

__all__ = [
    "GLOBAL_TIME_SERIES",
    "LOOKUP",
    "US_CASES",
    "US_DEATHS",
    "TableSchema",
    "date_columns",
    "validate",
    "validate_long",
]

# JHU date headers look like 1/22/20
DATE_COLUMN = re.compile(r"^\d{1,2}/\d{1,2}/\d{2}$")
DATE_FORMAT = "%m/%d/%y"

logger = logging.getLogger(__name__)


class TableSchema(NamedTuple):
    name: str
    id_columns: Tuple[str, ...]
    time_series: bool = True


US_CASES = TableSchema(
    name="US cases",
    id_columns=(
        "UID",
        "iso2",
        "iso3",
        "code3",
        "FIPS",
        "Admin2",
        "Province_State",
        "Country_Region",
        "Lat",
        "Long_",
        "Combined_Key",
    ),
)

# The deaths file repeats the lookup table's population
US_DEATHS = US_CASES._replace(
    name="US deaths", id_columns=US_CASES.id_columns + ("Population",)
)

GLOBAL_TIME_SERIES = TableSchema(
    name="global time series",
    id_columns=("Province/State", "Country/Region", "Lat", "Long"),
)

LOOKUP = TableSchema(
    name="UID lookup",
    id_columns=(
        "UID",
        "iso3",
        "Admin2",
        "Province_State",
        "Country_Region",
        "Lat",
        "Long_",
        "Population",
    ),
    time_series=False,
)


def date_columns(df: pd.DataFrame) -> List[str]:
    """List the columns whose names are report dates."""
    return [c for c in df.columns if DATE_COLUMN.match(str(c))]


def validate(df: pd.DataFrame, schema: TableSchema) -> pd.DataFrame:
    """Check a wide table against its schema and hand it back unchanged.

    Args:
        df (DataFrame): table as read from the source
        schema (TableSchema): expected layout

    Returns:
        (DataFrame) the same table

    Raises:
        SchemaMismatch: identifier columns are absent, or a time-series
            table carries no date columns
    """
    missing = [c for c in schema.id_columns if c not in df.columns]
    if missing:
        raise SchemaMismatch(f"{schema.name} table is missing columns {missing}")

    if schema.time_series:
        n_dates = len(date_columns(df))
        if n_dates == 0:
            raise SchemaMismatch(f"{schema.name} table has no date columns")
        logger.info(f"{schema.name}: {len(df)} rows x {n_dates} dates")

    return df


def validate_long(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """Check a table carries the columns a reshape or join needs."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise SchemaMismatch(f"table is missing columns {missing}")
    return df
