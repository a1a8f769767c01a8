"""Data sources.

The JHU CSSE repository publishes cumulative COVID-19 counts as one CSV per
measure, with one column per reported day. Changing the module constants
below (or the matching environment variables) points the pipeline at a
different snapshot of the same layout.
"""

import os
from typing import Optional

_BASE_URL_NAME = "USCOVID_BASE_URL"
_LOOKUP_URL_NAME = "USCOVID_LOOKUP_URL"
_STATE_NAME = "USCOVID_STATE"

BASE_URL = (
    "https://raw.githubusercontent.com/CSSEGISandData/COVID-19/master/"
    "csse_covid_19_data/csse_covid_19_time_series/"
)
LOOKUP_URL = (
    "https://raw.githubusercontent.com/CSSEGISandData/COVID-19/master/"
    "csse_covid_19_data/UID_ISO_FIPS_LookUp_Table.csv"
)

GLOBAL_CASES_FILE = "time_series_covid19_confirmed_global.csv"
GLOBAL_DEATHS_FILE = "time_series_covid19_deaths_global.csv"
US_CASES_FILE = "time_series_covid19_confirmed_US.csv"
US_DEATHS_FILE = "time_series_covid19_deaths_US.csv"

# State used for the county-level summary
COUNTY_STATE = "Florida"


def get_base_url(base_url: Optional[str] = None) -> str:
    """Resolve the time-series base URL, preferring an explicit value."""
    url = base_url or os.environ.get(_BASE_URL_NAME, BASE_URL)
    if not url.endswith("/"):
        url += "/"
    return url


def get_lookup_url(lookup_url: Optional[str] = None) -> str:
    return lookup_url or os.environ.get(_LOOKUP_URL_NAME, LOOKUP_URL)


def get_county_state(state: Optional[str] = None) -> str:
    return state or os.environ.get(_STATE_NAME, COUNTY_STATE)
