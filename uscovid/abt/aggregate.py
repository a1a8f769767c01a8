#!/usr/bin/env python3
"""
Overview:

Summary tables built from the joined daily observations:

- daily_totals: national cumulative cases and deaths per date
- state_totals: last reported cumulative cases and deaths per state
- county_totals: last reported cumulative cases and deaths per county of one state

State and county totals are joined to population from the UID lookup table to
derive rates. Rows without a population are dropped before the rates are
computed (drop_missing_population).

Note: the counts are cumulative, so the maximum over dates is the last value
reported for a region. Null counts from the cases/deaths join count as 0 in
sums and are skipped by max.
"""

import logging
import warnings
from typing import List

import pandas as pd

from uscovid.exceptions import JoinNullWarning

__all__ = [
    "choropleth_values",
    "county_population",
    "county_summary",
    "county_totals",
    "daily_totals",
    "drop_missing_population",
    "global_daily_totals",
    "rank",
    "state_population",
    "state_summary",
    "state_totals",
]

COUNTS = ["cases", "deaths"]
TOTALS = {"cases": "total_cases", "deaths": "total_deaths"}

logger = logging.getLogger(__name__)


# ------- Totals ------- #


def daily_totals(joined: pd.DataFrame) -> pd.DataFrame:
    """Sum cases and deaths over all regions for each date."""
    return (
        joined.groupby("date", as_index=False)[COUNTS].sum().sort_values("date")
    ).reset_index(drop=True)


def state_totals(joined: pd.DataFrame) -> pd.DataFrame:
    """Last reported cumulative cases and deaths per state.

    Counties are summed per state and date first, so the result is the
    state-wide cumulative total rather than its largest county.
    """
    per_day = joined.groupby(["state", "date"], as_index=False)[COUNTS].sum()
    totals = per_day.groupby("state", as_index=False)[COUNTS].max()
    logger.info(f"State totals for {len(totals)} states")
    return totals.rename(columns=TOTALS)


def county_totals(joined: pd.DataFrame, state: str) -> pd.DataFrame:
    """Last reported cumulative cases and deaths per county in one state."""
    in_state = joined[joined["state"] == state]
    if in_state.empty:
        logger.warning(f"No county rows found for {state}")

    totals = in_state.groupby(["county", "state"], as_index=False)[COUNTS].max()
    logger.info(f"County totals for {len(totals)} counties in {state}")
    return totals.rename(columns=TOTALS)


def global_daily_totals(cases: pd.DataFrame, deaths: pd.DataFrame) -> pd.DataFrame:
    """Worldwide cumulative cases and deaths per date from the global tables."""
    return pd.merge(
        cases.groupby("date", as_index=False)["cases"].sum(),
        deaths.groupby("date", as_index=False)["deaths"].sum(),
        how="outer",
        on="date",
    ).sort_values("date").reset_index(drop=True)


# ------- Population ------- #


def _us_lookup(lookup: pd.DataFrame) -> pd.DataFrame:
    return lookup[(lookup["iso3"] == "USA") & lookup["Province_State"].notna()]


def state_population(lookup: pd.DataFrame) -> pd.DataFrame:
    """State-level rows of the UID lookup table.

    Returns:
        (DataFrame) columns state, population, lat, long
    """
    us = _us_lookup(lookup)
    states = us[us["Admin2"].isna()].rename(
        columns={
            "Province_State": "state",
            "Population": "population",
            "Lat": "lat",
            "Long_": "long",
        }
    )
    return states.loc[:, ["state", "population", "lat", "long"]].drop_duplicates(
        "state"
    ).reset_index(drop=True)


def county_population(lookup: pd.DataFrame) -> pd.DataFrame:
    """County-level rows of the UID lookup table.

    Returns:
        (DataFrame) columns county, state, population, lat, long
    """
    us = _us_lookup(lookup)
    counties = us[us["Admin2"].notna()].rename(
        columns={
            "Admin2": "county",
            "Province_State": "state",
            "Population": "population",
            "Lat": "lat",
            "Long_": "long",
        }
    )
    return counties.loc[
        :, ["county", "state", "population", "lat", "long"]
    ].drop_duplicates(["county", "state"]).reset_index(drop=True)


def drop_missing_population(df: pd.DataFrame) -> pd.DataFrame:
    """Drop rows whose population is null or not positive.

    This is an explicit filter: the dropped regions are named in a
    JoinNullWarning so they do not vanish unnoticed.
    """
    missing = df["population"].isna() | (df["population"] <= 0)
    if missing.any():
        keys = [c for c in ("county", "state") if c in df.columns]
        dropped = df.loc[missing, keys].astype(str).agg(", ".join, axis=1).tolist()
        warnings.warn(
            f"Dropping {missing.sum()} rows without population: {dropped}",
            JoinNullWarning,
            stacklevel=2,
        )
    return df.loc[~missing].reset_index(drop=True)


# ------- Summaries ------- #


def per_100k(total: pd.Series, population: pd.Series) -> pd.Series:
    return (total * 100000 / population).round()


def percent(total: pd.Series, population: pd.Series) -> pd.Series:
    return total * 100 / population


def _with_population(
    totals: pd.DataFrame, population: pd.DataFrame, keys: List[str]
) -> pd.DataFrame:
    merged = pd.merge(
        totals,
        population.loc[:, keys + ["population"]],
        how="left",
        on=keys,
    )
    merged = drop_missing_population(merged)
    return merged.assign(
        cases_per_100k=per_100k(merged["total_cases"], merged["population"]),
        deaths_per_100k=per_100k(merged["total_deaths"], merged["population"]),
    )


def state_summary(totals: pd.DataFrame, population: pd.DataFrame) -> pd.DataFrame:
    """Join state totals to population and derive rates per 100k.

    Returns:
        (DataFrame) columns state, total_cases, total_deaths, population,
            cases_per_100k, deaths_per_100k
    """
    return _with_population(totals, population, ["state"])


def county_summary(totals: pd.DataFrame, population: pd.DataFrame) -> pd.DataFrame:
    """Join county totals to population and derive rates.

    Counties carry percent of population alongside the per-100k rates.
    """
    summary = _with_population(totals, population, ["county", "state"])
    return summary.assign(
        cases_percent=percent(summary["total_cases"], summary["population"]),
        deaths_percent=percent(summary["total_deaths"], summary["population"]),
    )


def choropleth_values(summary: pd.DataFrame) -> pd.Series:
    """Cases per 100k keyed by state name, for coloring a state map."""
    return summary.set_index("state")["cases_per_100k"]


def rank(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """Sort descending by one column for display."""
    return df.sort_values(column, ascending=False).reset_index(drop=True)
