#!/usr/bin/env python3
"""
Overview:

Build the report tables from the JHU CSSE snapshot:

- US cases & deaths (county level) -> filtered to USA, melted to long form
- "Unassigned" county rows removed, negative counts flagged but kept
- cases & deaths joined into daily observations
- days where cumulative cases go down reported, not corrected
- national daily totals, state summary and county summary for one state
- worldwide daily totals from the global files

Each step takes the previous step's table and returns a new one.

Run from the root of the repo:

    python -m uscovid.abt.build_report

Set USCOVID_STATE to pick the state used for the county summary.
"""

import logging
from typing import NamedTuple, Optional

import pandas as pd

from uscovid.abt import aggregate, transform_jhu
from uscovid.abt.join_cases_deaths import join_cases_deaths
from uscovid.data import get_county_state, jhu

logger = logging.getLogger(__name__)


class Report(NamedTuple):
    daily: pd.DataFrame
    states: pd.DataFrame
    counties: pd.DataFrame
    anomalies: pd.DataFrame
    decreases: pd.DataFrame
    global_daily: pd.DataFrame


def build_observations(raw: jhu.RawTables) -> pd.DataFrame:
    """US daily observations: one row per county and date with cases & deaths."""
    cases = transform_jhu.drop_unassigned(
        transform_jhu.reshape_us(transform_jhu.filter_us(raw.us_cases), "cases")
    )
    deaths = transform_jhu.drop_unassigned(
        transform_jhu.reshape_us(transform_jhu.filter_us(raw.us_deaths), "deaths")
    )
    return join_cases_deaths(cases, deaths)


def build_report(raw: jhu.RawTables, state: Optional[str] = None) -> Report:
    """Run every transformation over already loaded source tables.

    Args:
        raw (RawTables): source tables from jhu.load_all
        state (optional str): state for the county summary

    Returns:
        (Report) the summary tables and the flagged rows
    """
    state = get_county_state(state)

    observations = build_observations(raw)
    anomalies = transform_jhu.flag_negative_counts(observations)
    decreases = transform_jhu.find_count_decreases(observations, "cases")

    states = aggregate.state_summary(
        aggregate.state_totals(observations),
        aggregate.state_population(raw.lookup),
    )
    counties = aggregate.county_summary(
        aggregate.county_totals(observations, state),
        aggregate.county_population(raw.lookup),
    )

    global_daily = aggregate.global_daily_totals(
        transform_jhu.reshape_global(raw.global_cases, "cases"),
        transform_jhu.reshape_global(raw.global_deaths, "deaths"),
    )

    return Report(
        daily=aggregate.daily_totals(observations),
        states=states,
        counties=counties,
        anomalies=anomalies,
        decreases=decreases,
        global_daily=global_daily,
    )


def run_pipeline(
    state: Optional[str] = None,
    base_url: Optional[str] = None,
    lookup_url: Optional[str] = None,
) -> Report:
    """Download the snapshot and build the report."""
    return build_report(jhu.load_all(base_url, lookup_url), state=state)


if __name__ == "__main__":

    logging.basicConfig(level=logging.INFO)

    report = run_pipeline()

    print("US cumulative totals (last 5 days):")
    print(report.daily.tail())

    print("\nStates by cases per 100k:")
    print(aggregate.rank(report.states, "cases_per_100k").head(10))

    print(f"\nCounties in {get_county_state()} by deaths as % of population:")
    print(aggregate.rank(report.counties, "deaths_percent").head(10))

    print(f"\nRows with negative counts: {len(report.anomalies)}")
    if not report.anomalies.empty:
        print(report.anomalies.groupby(["state", "date"]).size())

    print(f"\nDays where cumulative cases went down: {len(report.decreases)}")
    if not report.decreases.empty:
        print(report.decreases.loc[:, ["county", "state", "date", "cases_change"]])

    print("\nWorldwide cumulative totals (last 5 days):")
    print(report.global_daily.tail())
