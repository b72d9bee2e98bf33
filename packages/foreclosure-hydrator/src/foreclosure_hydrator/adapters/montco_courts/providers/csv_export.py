"""
Court case-search CSV export source.

The Montgomery County case search exports one row per case. Column headers
drift between exports ("CaseNumber", "Case Number", "Judgement Entered"), so
columns are located by case-insensitive substring on the squashed header.
"""

import csv
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from foreclosure_hydrator.utils.logging_utils import pipeline_logger
from foreclosure_types.schemas import RawCase

from .base import CaseIntakeError

log = pipeline_logger("intake", adapter="montco_courts")

# field -> substring looked up in the squashed, lower-cased header
COLUMN_KEYS: Dict[str, str] = {
    "case_number": "casenumber",
    "commenced_date": "commenced",
    "plaintiff": "plaintiff",
    "defendant": "defendant",
    "judgement": "judgement",
    "status": "status",
}


def _squash(header: str) -> str:
    return "".join(header.lower().split()).replace("_", "")


def locate_columns(header: Sequence[str]) -> Dict[str, Optional[int]]:
    """Map each known field to its column index (None when absent)."""
    squashed = [_squash(h) for h in header]
    columns: Dict[str, Optional[int]] = {}
    for field, key in COLUMN_KEYS.items():
        columns[field] = next((i for i, h in enumerate(squashed) if key in h), None)
    return columns


def _cell(values: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(values):
        return ""
    return values[index].strip()


class CsvCaseSource:
    """Case source backed by the court's CSV export."""

    def __init__(self, csv_path: Path, encoding: str = "utf-8"):
        self.csv_path = Path(csv_path)
        self.encoding = encoding

    @property
    def name(self) -> str:
        return "montco_csv"

    def _read_rows(self) -> List[List[str]]:
        if not self.csv_path.exists():
            raise CaseIntakeError(self.name, str(self.csv_path), "case file not found")
        try:
            with open(self.csv_path, newline="", encoding=self.encoding) as f:
                return [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise CaseIntakeError(self.name, str(self.csv_path), str(e)) from e

    def fetch_cases(self) -> List[RawCase]:
        """
        Read every case row from the export.

        Returns:
            RawCase list in file order; rows without a case number are skipped

        Raises:
            CaseIntakeError: If the file is missing, empty or has no case-number column
        """
        rows = self._read_rows()
        if len(rows) < 2:
            raise CaseIntakeError(self.name, str(self.csv_path), "CSV empty")

        columns = locate_columns(rows[0])
        if columns["case_number"] is None:
            raise CaseIntakeError(
                self.name, str(self.csv_path), f"no case number column in header {rows[0]}"
            )

        cases: List[RawCase] = []
        skipped = 0
        for values in rows[1:]:
            case_number = _cell(values, columns["case_number"])
            if not case_number:
                skipped += 1
                continue
            cases.append(
                RawCase(
                    case_number=case_number,
                    commenced_date=_cell(values, columns["commenced_date"]),
                    plaintiff=_cell(values, columns["plaintiff"]),
                    defendant=_cell(values, columns["defendant"]),
                    has_judgement=_cell(values, columns["judgement"]).lower() == "yes",
                    status=_cell(values, columns["status"]),
                )
            )

        if skipped:
            log.debug(f"Skipped {skipped} CSV rows without a case number")
        log.info(f"Read {len(cases)} cases from {self.csv_path}")
        return cases
