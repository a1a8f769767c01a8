#!/usr/bin/env python3
"""
Overview:

Join the long cases and deaths tables into one table of daily observations

county | state | lat | long | date | cases | deaths

Both tables come from the same feed so the keys should match one to one, but
the join is a full outer join: a region/date missing on one side keeps its
row with a null count instead of disappearing.
"""

import logging

import pandas as pd

from uscovid.abt.transform_jhu import ID_COLUMNS

JOIN_KEYS = ID_COLUMNS + ["date"]

logger = logging.getLogger(__name__)


def join_cases_deaths(cases: pd.DataFrame, deaths: pd.DataFrame) -> pd.DataFrame:
    """Full outer join of cases and deaths on region, coordinates and date.

    Args:
        cases (DataFrame): long table with a `cases` column
        deaths (DataFrame): long table with a `deaths` column

    Returns:
        (DataFrame) one row per region and date with `cases` and `deaths`
    """
    joined = pd.merge(
        cases.loc[:, JOIN_KEYS + ["cases"]],
        deaths.loc[:, JOIN_KEYS + ["deaths"]],
        how="outer",
        on=JOIN_KEYS,
        indicator=True,
    )

    unmatched = joined["_merge"].value_counts()
    logger.info(
        f"Joined cases and deaths: {joined.shape}, "
        f"{unmatched.get('left_only', 0)} rows without deaths, "
        f"{unmatched.get('right_only', 0)} rows without cases"
    )

    return joined.drop(columns="_merge")
