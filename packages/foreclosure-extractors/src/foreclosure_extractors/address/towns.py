"""
Known municipalities per target county.

Town matching is substring based, so every lookup goes through
``towns_longest_first`` to make "LOWER MERION" win over "MERION".
"""

from typing import Dict, Iterable, List, Optional, Tuple

# Montgomery County (PA) townships, boroughs and postal place names
MONTCO_TOWNS: Tuple[str, ...] = (
    "ABINGTON", "AMBLER", "BRIDGEPORT", "BRYN ATHYN", "CHELTENHAM", "COLLEGEVILLE",
    "CONSHOHOCKEN", "DOUGLASS", "EAST GREENVILLE", "EAST NORRITON", "FRANCONIA",
    "GREEN LANE", "HATBORO", "HATFIELD", "HORSHAM", "JENKINTOWN", "LANSDALE",
    "LIMERICK", "LOWER FREDERICK", "LOWER GWYNEDD", "LOWER MERION", "LOWER MORELAND",
    "LOWER POTTSGROVE", "LOWER PROVIDENCE", "LOWER SALFORD", "MARLBOROUGH",
    "MONTGOMERY", "NARBERTH", "NEW HANOVER", "NORRISTOWN", "NORTH WALES", "PENNSBURG",
    "PERKIOMEN", "PLYMOUTH", "POTTSTOWN", "RED HILL", "ROCKLEDGE", "ROYERSFORD",
    "SALFORD", "SCHWENKSVILLE", "SKIPPACK", "SOUDERTON", "SPRINGFIELD", "TELFORD",
    "TOWAMENCIN", "TRAPPE", "UPPER DUBLIN", "UPPER FREDERICK", "UPPER GWYNEDD",
    "UPPER HANOVER", "UPPER MERION", "UPPER MORELAND", "UPPER POTTSGROVE",
    "UPPER PROVIDENCE", "UPPER SALFORD", "WEST CONSHOHOCKEN", "WEST NORRITON",
    "WEST POTTSGROVE", "WHITEMARSH", "WHITPAIN", "WORCESTER",
    "GLENSIDE", "ARDMORE", "WILLOW GROVE", "KING OF PRUSSIA", "BLUE BELL",
    "FORT WASHINGTON", "FLOURTOWN", "ORELAND", "WYNDMOOR", "ELKINS PARK",
    "GLADWYNE", "BALA CYNWYD", "MERION", "WYNNEWOOD", "HAVERFORD",
    "PLYMOUTH MEETING", "DRESHER", "MAPLE GLEN", "HARLEYSVILLE",
)

# Camden County (NJ) municipalities
CAMDEN_TOWNS: Tuple[str, ...] = (
    "CAMDEN", "CHERRY HILL", "VOORHEES", "SICKLERVILLE", "HADDONFIELD",
    "BLACKWOOD", "LINDENWOLD", "GLOUCESTER", "PENNSAUKEN", "COLLINGSWOOD",
    "CLEMENTON", "ATCO", "BERLIN", "MAGNOLIA", "AUDUBON", "RUNNEMEDE",
    "BELLMAWR", "HADDON", "WINSLOW", "PINE HILL", "GLENDORA", "ERIAL",
    "WATERFORD", "MERCHANTVILLE", "LAWNSIDE", "BARRINGTON", "SOMERDALE",
    "OAKLYN", "WOODLYNNE", "STRATFORD", "LAUREL SPRINGS", "CHESILHURST",
    "MOUNT EPHRAIM", "BROOKLAWN", "HADDON HEIGHTS", "HADDON TOWNSHIP",
    "GLOUCESTER CITY", "GLOUCESTER TWP", "WINSLOW TOWNSHIP",
)

COUNTY_TOWNS: Dict[str, Tuple[str, ...]] = {
    "montgomery": MONTCO_TOWNS,
    "camden": CAMDEN_TOWNS,
}


def county_towns(county_name: str) -> Tuple[str, ...]:
    """Return the known town list for a county name (case-insensitive)."""
    key = county_name.strip().lower()
    if key not in COUNTY_TOWNS:
        raise ValueError(f"Unsupported county: {county_name}")
    return COUNTY_TOWNS[key]


def towns_longest_first(towns: Iterable[str]) -> List[str]:
    """Upper-cased, de-duplicated town names, longest first (ties alphabetical)."""
    return sorted({t.strip().upper() for t in towns if t.strip()}, key=lambda t: (-len(t), t))


def match_town(city: str, towns: Iterable[str]) -> Optional[str]:
    """Return the longest known town contained in ``city``, or None."""
    if not city:
        return None
    upper_city = " ".join(city.upper().split())
    for town in towns_longest_first(towns):
        if town in upper_city:
            return town
    return None
