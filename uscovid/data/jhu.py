#!/usr/bin/env python3
"""Download the JHU CSSE time series and lookup tables.

Each file is fetched once with no retry; any failure aborts the run so a
report is never built from a partial download.
"""

import io
import logging
from typing import NamedTuple, Optional

import pandas as pd
import requests

from uscovid.data import (
    GLOBAL_CASES_FILE,
    GLOBAL_DEATHS_FILE,
    US_CASES_FILE,
    US_DEATHS_FILE,
    get_base_url,
    get_lookup_url,
    schema,
)
from uscovid.exceptions import FetchError

logger = logging.getLogger(__name__)


class RawTables(NamedTuple):
    global_cases: pd.DataFrame
    global_deaths: pd.DataFrame
    us_cases: pd.DataFrame
    us_deaths: pd.DataFrame
    lookup: pd.DataFrame


def get_csv(url: str) -> pd.DataFrame:
    """Download a CSV and load it into a DataFrame.

    Raises:
        FetchError: the request failed or the body is not a usable table
    """
    logger.info(f"Downloading {url}")
    try:
        r = requests.get(url)
        r.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"could not download {url}: {e}") from e

    try:
        df = pd.read_csv(io.StringIO(r.content.decode("utf-8")), low_memory=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise FetchError(f"could not parse {url}: {e}") from e

    logger.info(f"Download complete: {df.shape}")
    return df


def load_table(filename: str, base_url: Optional[str] = None) -> pd.DataFrame:
    """Fetch one time-series file relative to the base URL."""
    return get_csv(get_base_url(base_url) + filename)


def load_all(
    base_url: Optional[str] = None, lookup_url: Optional[str] = None
) -> RawTables:
    """Fetch and validate all five input tables.

    Args:
        base_url (optional str): directory holding the time-series files
        lookup_url (optional str): full URL of the UID lookup table

    Returns:
        (RawTables) the wide source tables
    """
    return RawTables(
        global_cases=schema.validate(
            load_table(GLOBAL_CASES_FILE, base_url), schema.GLOBAL_TIME_SERIES
        ),
        global_deaths=schema.validate(
            load_table(GLOBAL_DEATHS_FILE, base_url), schema.GLOBAL_TIME_SERIES
        ),
        us_cases=schema.validate(load_table(US_CASES_FILE, base_url), schema.US_CASES),
        us_deaths=schema.validate(
            load_table(US_DEATHS_FILE, base_url), schema.US_DEATHS
        ),
        lookup=schema.validate(get_csv(get_lookup_url(lookup_url)), schema.LOOKUP),
    )
