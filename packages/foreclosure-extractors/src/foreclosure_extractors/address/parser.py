"""
Best-effort postal address parsing.

Court and sheriff-sale pages print property addresses inconsistently: sometimes
street and city sit on separate lines, sometimes they are run together on one
line ("25 ASPEN WAYSCHWENKSVILLE, PA 19473"). There is no grammar to parse, so
the street/city split is an ordered chain of strategies, each tried in turn:

1. explicit delimiter (line break, then last comma)
2. last street-type suffix token (ST, AVE, WAY, ...)
3. known county town run into the end of the street
4. lowercase-to-uppercase transition ("...WaySchwenksville")
5. give up: everything is the street

``parse_address`` never raises. A missing or unparseable address is a valid,
low-confidence result with empty fields.
"""

import re
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from foreclosure_types.schemas import PropertyAddress

from .towns import MONTCO_TOWNS, match_town, towns_longest_first

STREET_SUFFIXES: Tuple[str, ...] = (
    "ST", "STREET", "AVE", "AVENUE", "RD", "ROAD", "DR", "DRIVE", "LN", "LANE",
    "CT", "COURT", "CIR", "CIRCLE", "BLVD", "PL", "WAY", "TER", "PIKE", "TRL",
    "HWY", "PKWY",
)

DEFAULT_VALID_STATES: Tuple[str, ...] = ("NJ", "PA")

_SUFFIX_RE = re.compile(r"\b(?:%s)\b\.?" % "|".join(STREET_SUFFIXES), re.IGNORECASE)
_AKA_RE = re.compile(r"A/K/A", re.IGNORECASE)
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_ZIP_AFTER_STATE_RE = re.compile(r"[\s,]*([0-9]{5})(?:-[0-9]{4})?(?![0-9])")
_TRAILING_ZIP_RE = re.compile(r"[\s,]*(?<![0-9])([0-9]{5})(?:-[0-9]{4})?\s*$")
_CASE_TRANSITION_RE = re.compile(r"[a-z](?=[A-Z])")
_INLINE_SPACE_RE = re.compile(r"[ \t\xa0]+")

Split = Optional[Tuple[str, str]]


def _state_pattern(valid_states: Sequence[str]) -> "re.Pattern[str]":
    tokens = "|".join(re.escape(s.upper()) for s in valid_states)
    return re.compile(rf"\b({tokens})\b", re.IGNORECASE)


def _clean(part: str) -> str:
    """Strip commas and collapse repeated whitespace."""
    return " ".join(part.replace(",", " ").split())


# ------------------------------------------------------------------------------
# Split strategies
# ------------------------------------------------------------------------------


def split_at_comma(segment: str, towns: Sequence[str]) -> Split:
    idx = segment.rfind(",")
    if idx <= 0:
        return None
    street, city = segment[:idx].strip(), segment[idx + 1:].strip()
    if not street or not city:
        return None
    return street, city


def split_at_suffix(segment: str, towns: Sequence[str]) -> Split:
    # Last suffix that still leaves a city behind ("10 MAIN ST GREEN LANE")
    for match in reversed(list(_SUFFIX_RE.finditer(segment))):
        street, city = segment[: match.end()].strip(), segment[match.end():].strip()
        if street and city:
            return street, city
    return None


def split_at_known_town(segment: str, towns: Sequence[str]) -> Split:
    upper = segment.upper()
    for town in towns:
        if upper.endswith(town) and len(segment) > len(town):
            street = segment[: -len(town)].strip()
            if street:
                return street, segment[-len(town):]
    return None


def split_at_case_transition(segment: str, towns: Sequence[str]) -> Split:
    matches = list(_CASE_TRANSITION_RE.finditer(segment))
    if not matches:
        return None
    cut = matches[-1].end()
    street, city = segment[:cut].strip(), segment[cut:].strip()
    if not street or not city:
        return None
    return street, city


SPLIT_STRATEGIES: Tuple[Callable[[str, Sequence[str]], Split], ...] = (
    split_at_comma,
    split_at_suffix,
    split_at_known_town,
    split_at_case_transition,
)


def split_street_city(before: str, towns: Sequence[str]) -> Tuple[str, str]:
    """Split the text preceding the state/ZIP into (street, city)."""
    lines = [line.strip() for line in before.split("\n") if line.strip(" ,")]
    if len(lines) >= 2:
        return lines[0], " ".join(lines[1:])
    if not lines:
        return "", ""

    segment = lines[0].strip().rstrip(",").strip()
    for strategy in SPLIT_STRATEGIES:
        result = strategy(segment, towns)
        if result is not None:
            logger.debug(f"Address split by {strategy.__name__}: {result}")
            return result

    logger.debug(f"No street/city split found for {segment!r}")
    return segment, ""


def _locate_state(text: str, valid_states: Sequence[str]):
    """Return (state match, zip match), preferring the last state token followed by a ZIP."""
    state_matches = list(_state_pattern(valid_states).finditer(text))
    for state_match in reversed(state_matches):
        zip_match = _ZIP_AFTER_STATE_RE.match(text, state_match.end())
        if zip_match:
            return state_match, zip_match
    if state_matches:
        return state_matches[-1], None
    return None, None


def _normalize_input(raw: str) -> str:
    text = _BR_RE.sub("\n", raw).replace("\r\n", "\n").replace("\r", "\n")
    text = _AKA_RE.split(text, maxsplit=1)[0]
    return "\n".join(_INLINE_SPACE_RE.sub(" ", line) for line in text.split("\n"))


def parse_address(
    raw: Optional[str],
    default_state: str = "PA",
    valid_states: Sequence[str] = DEFAULT_VALID_STATES,
    towns: Iterable[str] = MONTCO_TOWNS,
) -> PropertyAddress:
    """
    Parse an unstructured address string into a PropertyAddress.

    Args:
        raw: Address text; line breaks mark street/city boundaries when present
        default_state: State used when no valid state token is found
        valid_states: Two-letter state tokens accepted for the jurisdiction
        towns: Known municipalities of the target county

    Returns:
        PropertyAddress; all-empty fields (with ``default_state``) when nothing parses
    """
    default_state = (default_state or "").strip().upper()
    if not raw or not raw.strip():
        return PropertyAddress(state=default_state)

    try:
        ordered_towns: List[str] = towns_longest_first(towns)
        text = _normalize_input(raw)

        state_match, zip_match = _locate_state(text, valid_states)
        if state_match is not None:
            state = state_match.group(1).upper()
            before = text[: state_match.start()]
        else:
            state = default_state
            before = text
            # No state token: a trailing ZIP still must not end up in the city
            zip_match = _TRAILING_ZIP_RE.search(before)
            if zip_match:
                before = before[: zip_match.start()]
        zip_code = zip_match.group(1) if zip_match else ""

        street, city = split_street_city(before, ordered_towns)
        street, city = _clean(street), _clean(city)

        county_town = match_town(city, ordered_towns)
        return PropertyAddress(
            street=street,
            city=city,
            state=state,
            zip=zip_code,
            in_target_county=county_town is not None,
            county_town=county_town,
        )
    except Exception as e:
        logger.warning(f"Failed to parse address {raw!r}: {e}")
        return PropertyAddress(state=default_state)
