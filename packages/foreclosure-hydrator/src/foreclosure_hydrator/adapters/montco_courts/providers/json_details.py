"""
File-backed document source.

Reads a JSON object keyed by case number, as saved by an upstream scraper:

    {"2024-12345": {"address": "...", "docket": [["1/2/2024", "Complaint"]],
                    "detailUrl": "https://...", "assessedValue": 185000}}

A case missing from the file, or stored as null, is reported as
EnrichmentUnavailable so the pipeline can record the gap and move on.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import orjson as json

from foreclosure_hydrator.utils.logging_utils import pipeline_logger
from foreclosure_types.schemas import CaseDetail

from .base import CaseIntakeError, EnrichmentUnavailable

log = pipeline_logger("intake", adapter="montco_courts")


def parse_docket_rows(raw: Any) -> Optional[List[Tuple[str, str]]]:
    if raw is None:
        return None
    rows: List[Tuple[str, str]] = []
    for item in raw:
        if isinstance(item, Mapping):
            rows.append((str(item.get("date", "")), str(item.get("description", ""))))
        elif isinstance(item, (list, tuple)) and len(item) >= 2:
            rows.append((str(item[0]), str(item[1])))
        else:
            log.debug(f"Ignoring malformed docket row: {item!r}")
    return rows


def parse_assessed_value(raw: Any) -> Optional[float]:
    """Dollar amount as a number; "$185,000" and 185000 both read as 185000."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw) if raw > 0 else None
    cleaned = str(raw).replace("$", "").replace(",", "").strip()
    try:
        value = float(cleaned)
    except ValueError:
        log.debug(f"Ignoring unreadable assessed value: {raw!r}")
        return None
    return value if value > 0 else None


class JsonDetailSource:
    """Document source backed by a JSON details file."""

    def __init__(self, details: Mapping[str, Any]):
        self._details: Dict[str, Any] = dict(details)

    @classmethod
    def from_file(cls, path: Path) -> "JsonDetailSource":
        path = Path(path)
        try:
            data = json.loads(path.read_bytes())
        except (OSError, json.JSONDecodeError) as e:
            raise CaseIntakeError("json_details", str(path), str(e)) from e
        if not isinstance(data, dict):
            raise CaseIntakeError("json_details", str(path), "expected an object keyed by case number")
        log.info(f"Loaded details for {len(data)} cases from {path}")
        return cls(data)

    @property
    def name(self) -> str:
        return "json_details"

    def fetch_detail(self, case_number: str) -> CaseDetail:
        record = self._details.get(case_number)
        if record is None:
            raise EnrichmentUnavailable(self.name, case_number, "no detail record")
        if not isinstance(record, Mapping):
            raise EnrichmentUnavailable(self.name, case_number, "malformed detail record")

        return CaseDetail(
            case_number=case_number,
            raw_address=record.get("address"),
            docket_rows=parse_docket_rows(record.get("docket")),
            detail_url=record.get("detailUrl") or record.get("detail_url"),
            assessed_value=parse_assessed_value(
                record.get("assessedValue", record.get("assessed_value"))
            ),
        )
