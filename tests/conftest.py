import numpy as np
import pandas as pd
import pytest

from uscovid.data.jhu import RawTables

DATES = ["1/1/21", "1/2/21", "1/3/21"]

US_ID = [
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
]

# (UID, iso3, Admin2, Province_State, Lat, Long_, cases, deaths)
US_ROWS = [
    (84012086, "USA", "Miami-Dade", "Florida", 25.61, -80.50, [10, 20, 30], [1, 2, 3]),
    (84090012, "USA", "Unassigned", "Florida", 0.0, 0.0, [0, 0, -1], [0, 0, 0]),
    (84013121, "USA", "Fulton", "Georgia", 33.79, -84.47, [5, 7, 9], [0, 1, 1]),
    (630, "PRI", np.nan, "Puerto Rico", 18.22, -66.59, [100, 100, 100], [4, 4, 4]),
]


def _us_wide(measure: int, population: bool) -> pd.DataFrame:
    records = []
    for uid, iso3, county, state, lat, lon, cases, deaths in US_ROWS:
        row = {
            "UID": uid,
            "iso2": "US" if iso3 == "USA" else "PR",
            "iso3": iso3,
            "code3": 840 if iso3 == "USA" else 630,
            "FIPS": float(uid % 100000),
            "Admin2": county,
            "Province_State": state,
            "Country_Region": "US",
            "Lat": lat,
            "Long_": lon,
            "Combined_Key": f"{county}, {state}, US",
        }
        if population:
            row["Population"] = 1000
        row.update(zip(DATES, (cases, deaths)[measure]))
        records.append(row)
    return pd.DataFrame(records)


@pytest.fixture
def us_cases() -> pd.DataFrame:
    return _us_wide(0, population=False)


@pytest.fixture
def us_deaths() -> pd.DataFrame:
    return _us_wide(1, population=True)


@pytest.fixture
def global_cases() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Province/State": [np.nan, np.nan],
            "Country/Region": ["Italy", "France"],
            "Lat": [41.87, 46.23],
            "Long": [12.57, 2.21],
            DATES[0]: [1, 4],
            DATES[1]: [2, 5],
            DATES[2]: [3, 6],
        }
    )


@pytest.fixture
def global_deaths(global_cases) -> pd.DataFrame:
    return global_cases.assign(**{DATES[0]: [0, 0], DATES[1]: [1, 0], DATES[2]: [1, 2]})


@pytest.fixture
def lookup() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "UID": [840, 84000012, 84000013, 84012086, 630],
            "iso2": ["US", "US", "US", "US", "PR"],
            "iso3": ["USA", "USA", "USA", "USA", "PRI"],
            "code3": [840, 840, 840, 840, 630],
            "FIPS": [np.nan, 12.0, 13.0, 12086.0, 72.0],
            "Admin2": [np.nan, np.nan, np.nan, "Miami-Dade", np.nan],
            "Province_State": [np.nan, "Florida", "Georgia", "Florida", "Puerto Rico"],
            "Country_Region": ["US", "US", "US", "US", "US"],
            "Lat": [40.0, 27.77, 33.04, 25.61, 18.22],
            "Long_": [-100.0, -81.69, -83.64, -80.50, -66.59],
            "Combined_Key": [
                "US",
                "Florida, US",
                "Georgia, US",
                "Miami-Dade, Florida, US",
                "Puerto Rico, US",
            ],
            "Population": [1000000, 1000, 300, 100, 3000],
        }
    )


@pytest.fixture
def raw(global_cases, global_deaths, us_cases, us_deaths, lookup) -> RawTables:
    return RawTables(
        global_cases=global_cases,
        global_deaths=global_deaths,
        us_cases=us_cases,
        us_deaths=us_deaths,
        lookup=lookup,
    )
