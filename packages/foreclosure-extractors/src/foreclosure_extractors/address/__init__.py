"""Address parsing and county town matching."""

from .parser import DEFAULT_VALID_STATES, STREET_SUFFIXES, parse_address, split_street_city
from .towns import (
    CAMDEN_TOWNS,
    COUNTY_TOWNS,
    MONTCO_TOWNS,
    county_towns,
    match_town,
    towns_longest_first,
)

__all__ = [
    "parse_address",
    "split_street_city",
    "DEFAULT_VALID_STATES",
    "STREET_SUFFIXES",
    "CAMDEN_TOWNS",
    "COUNTY_TOWNS",
    "MONTCO_TOWNS",
    "county_towns",
    "match_town",
    "towns_longest_first",
]
