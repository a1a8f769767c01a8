#!/usr/bin/env python3
"""
Overview:

Transform the JHU CSSE time series into long tables.

The raw US files have the following wide format:

UID | iso2 | iso3 | code3 | FIPS | Admin2 | Province_State | Country_Region | Lat | Long_ | Combined_Key | 1/22/20 | 1/23/20 ...
... | ...  | ...  | ...   | ...  | ...    | ...            | ...            | ... | ...   | ...          | ...     | ...

(the deaths file also carries Population after Combined_Key).

The functions below map them into:

county | state | lat | long | date       | cases
...    | ...   | ... | ...  | 2020-01-22 | ...

Every function returns a new table; inputs are never modified.
"""

import logging
import warnings
from typing import Iterable, Sequence

import pandas as pd

from uscovid.data import schema
from uscovid.exceptions import DataQualityWarning, SchemaMismatch

__all__ = [
    "ID_COLUMNS",
    "drop_unassigned",
    "filter_us",
    "find_count_decreases",
    "flag_negative_counts",
    "reshape_global",
    "reshape_us",
]

# Columns that identify the source row rather than the region
US_DROP_COLUMNS = [
    "UID",
    "iso2",
    "iso3",
    "code3",
    "FIPS",
    "Country_Region",
    "Combined_Key",
    "Population",
]

US_RENAME = {
    "Admin2": "county",
    "Province_State": "state",
    "Lat": "lat",
    "Long_": "long",
}

GLOBAL_RENAME = {
    "Province/State": "province",
    "Country/Region": "country",
    "Lat": "lat",
    "Long": "long",
}

ID_COLUMNS = ["county", "state", "lat", "long"]
GLOBAL_ID_COLUMNS = ["country", "province", "lat", "long"]

UNASSIGNED = "Unassigned"

logger = logging.getLogger(__name__)


def filter_us(df: pd.DataFrame) -> pd.DataFrame:
    """Keep only rows reported for the United States."""
    us = df[df["iso3"] == "USA"].reset_index(drop=True)
    logger.info(f"Kept {len(us)} of {len(df)} rows for USA")
    return us


def _melt(
    df: pd.DataFrame, id_vars: Sequence[str], value_name: str
) -> pd.DataFrame:
    """Melt every date column into one row per region and date."""
    schema.validate_long(df, id_vars)
    dates = schema.date_columns(df)
    if not dates:
        raise SchemaMismatch("wide table has no date columns")

    long_df = df.melt(
        id_vars=list(id_vars), value_vars=dates, var_name="date", value_name=value_name
    )
    long_df["date"] = pd.to_datetime(long_df["date"], format=schema.DATE_FORMAT)
    return long_df


def reshape_us(df: pd.DataFrame, value_name: str) -> pd.DataFrame:
    """Reshape a wide US time series (cases or deaths) into long form.

    Population is dropped along with the identifier columns since the
    lookup table is the single source for it.

    Args:
        df (DataFrame): wide US table, already filtered to USA
        value_name (str): name of the count column, "cases" or "deaths"

    Returns:
        (DataFrame) columns county, state, lat, long, date, <value_name>
    """
    wide = df.drop(columns=US_DROP_COLUMNS, errors="ignore").rename(columns=US_RENAME)
    return _melt(wide, ID_COLUMNS, value_name)


def reshape_global(df: pd.DataFrame, value_name: str) -> pd.DataFrame:
    """Reshape a wide global time series into long form."""
    wide = df.rename(columns=GLOBAL_RENAME)
    return _melt(wide, GLOBAL_ID_COLUMNS, value_name)


def drop_unassigned(df: pd.DataFrame, column: str = "county") -> pd.DataFrame:
    """Remove rows for cases that were never allocated to a county.

    These rows only carry zero or negative counts. Other negative counts
    are kept, see flag_negative_counts.
    """
    unassigned = df[column] == UNASSIGNED
    logger.info(f"Dropping {unassigned.sum()} '{UNASSIGNED}' rows")
    return df.loc[~unassigned].reset_index(drop=True)


def flag_negative_counts(
    df: pd.DataFrame, columns: Iterable[str] = ("cases", "deaths")
) -> pd.DataFrame:
    """Report rows with negative counts without changing them.

    Args:
        df (DataFrame): long or joined table
        columns (iterable): count columns to check, missing ones are skipped

    Returns:
        (DataFrame) the offending rows, empty if there are none
    """
    cols = [c for c in columns if c in df.columns]
    negative = (df[cols] < 0).any(axis=1)
    anomalies = df.loc[negative]

    if not anomalies.empty:
        states = sorted(anomalies["state"].dropna().unique())
        warnings.warn(
            f"{len(anomalies)} rows have negative counts in {states} "
            f"between {anomalies['date'].min():%Y-%m-%d} "
            f"and {anomalies['date'].max():%Y-%m-%d}",
            DataQualityWarning,
            stacklevel=2,
        )
    return anomalies


def find_count_decreases(
    df: pd.DataFrame, column: str, keys: Sequence[str] = ("county", "state")
) -> pd.DataFrame:
    """Find rows where a cumulative count is lower than the day before.

    Returns:
        (DataFrame) the offending rows with a `<column>_change` column
    """
    ordered = df.sort_values(list(keys) + ["date"])
    change = ordered.groupby(list(keys), dropna=False)[column].diff()
    decreases = ordered.loc[change < 0].assign(**{f"{column}_change": change[change < 0]})
    logger.info(f"Found {len(decreases)} decreases in cumulative {column}")
    return decreases.reset_index(drop=True)
