"""
Data Writer with Manifest Generation

This module handles writing pipeline results to disk: the JSON document
({lastUpdated, totalCases, statistics, cases}), an optional flat CSV export for
spreadsheets, and a self-describing manifest with file hashes.
"""

import hashlib
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import orjson as json
import pandas as pd

from foreclosure_hydrator.utils.logging_utils import pipeline_logger
from foreclosure_types.schemas import PipelineResult, ScoredCase

SCHEMA_VERSION = "1.0"

CSV_COLUMNS = [
    "Case Number", "Commenced Date", "Days Open", "Last Filing", "Plaintiff (Bank)",
    "Defendant (Owner)", "Property Address", "City", "State", "Zip", "In Target County",
    "Has Judgement", "Status", "Lead Score", "Lead Grade", "Has Default Motion",
    "Has Defendant Attorney", "Has Defendant Response", "Has Conciliation",
    "Has Bankruptcy", "Is Stayed", "Docket Available", "Assessed Value", "Est. Equity",
    "Remarks", "Detail URL",
]

log = pipeline_logger("writer", adapter="montco_courts")


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def to_record(scored: ScoredCase) -> Dict[str, Any]:
    """
    Flatten a scored case into its persisted wire shape.

    Args:
        scored: Scored case

    Returns:
        JSON-ready dictionary with camelCase keys
    """
    case = scored.case
    address = scored.address
    return {
        "caseNumber": case.case_number,
        "commencedDate": case.commenced_date.isoformat() if case.commenced_date else None,
        "plaintiff": case.plaintiff,
        "defendant": case.defendant,
        "hasJudgement": case.has_judgement,
        "status": case.status,
        "daysOpen": case.days_open,
        "propertyAddress": address.street if address else "",
        "propertyCity": address.city if address else "",
        "propertyState": address.state if address else "",
        "propertyZip": address.zip if address else "",
        "inTargetCounty": address.in_target_county if address else False,
        "countyTown": address.county_town if address else None,
        "docketAvailable": scored.docket_available,
        "enrichmentError": scored.enrichment_error,
        "docketSummary": scored.docket.model_dump(by_alias=True, mode="json"),
        "leadScore": scored.lead.score,
        "leadGrade": scored.lead.grade.value,
        "scoreFactors": [f.model_dump(by_alias=True) for f in scored.lead.factors],
        "assessedValue": scored.assessed_value,
        "equityEstimate": scored.equity.model_dump(by_alias=True, mode="json")
        if scored.equity
        else None,
        "remarks": scored.remarks,
        "detailUrl": scored.detail_url,
    }


def to_document(result: PipelineResult) -> Dict[str, Any]:
    """Build the persisted JSON document for a pipeline run."""
    return {
        "lastUpdated": result.last_updated.isoformat(),
        "totalCases": result.total_cases,
        "statistics": result.statistics.model_dump(by_alias=True, mode="json"),
        "cases": [to_record(c) for c in result.cases],
    }


def to_dataframe(cases: Sequence[ScoredCase]) -> pd.DataFrame:
    """
    Convert scored cases to a flat spreadsheet table, one row per case.

    Args:
        cases: Scored cases, in the order they should appear

    Returns:
        DataFrame with flags rendered as Yes/No
    """
    data = []
    for scored in cases:
        record = to_record(scored)
        docket = scored.docket
        data.append(
            {
                "Case Number": record["caseNumber"],
                "Commenced Date": record["commencedDate"] or "",
                "Days Open": record["daysOpen"],
                "Last Filing": docket.last_activity_date.isoformat()
                if docket.last_activity_date
                else "",
                "Plaintiff (Bank)": record["plaintiff"],
                "Defendant (Owner)": record["defendant"],
                "Property Address": record["propertyAddress"],
                "City": record["propertyCity"],
                "State": record["propertyState"],
                "Zip": record["propertyZip"],
                "In Target County": _yes_no(record["inTargetCounty"]),
                "Has Judgement": _yes_no(record["hasJudgement"]),
                "Status": record["status"],
                "Lead Score": record["leadScore"],
                "Lead Grade": record["leadGrade"],
                "Has Default Motion": _yes_no(docket.has_default_motion),
                "Has Defendant Attorney": _yes_no(docket.has_defendant_attorney),
                "Has Defendant Response": _yes_no(docket.has_defendant_response),
                "Has Conciliation": _yes_no(docket.has_conciliation),
                "Has Bankruptcy": _yes_no(docket.has_bankruptcy),
                "Is Stayed": _yes_no(docket.is_stayed),
                "Docket Available": _yes_no(record["docketAvailable"]),
                "Assessed Value": round(scored.assessed_value) if scored.assessed_value else "",
                "Est. Equity": scored.equity.estimated_equity if scored.equity else "",
                "Remarks": record["remarks"],
                "Detail URL": record["detailUrl"] or "",
            }
        )

    return pd.DataFrame(data, columns=CSV_COLUMNS)


def _sha256(path: Path) -> str:
    with open(path, "rb") as f:
        return hashlib.sha256(f.read()).hexdigest()


def write_json(result: PipelineResult, output_path: Path) -> str:
    """
    Write the pipeline document as indented JSON.

    Returns:
        SHA256 hash of the written file
    """
    output_path.write_bytes(json.dumps(to_document(result), option=json.OPT_INDENT_2))
    log.info(f"Wrote {result.total_cases} cases to {output_path}")
    return _sha256(output_path)


def write_csv(df: pd.DataFrame, output_path: Path) -> str:
    """
    Write DataFrame to CSV file.

    Returns:
        SHA256 hash of the written file
    """
    df.to_csv(output_path, index=False)
    log.info(f"Wrote {len(df)} rows to {output_path}")
    return _sha256(output_path)


def generate_manifest(
    result: PipelineResult,
    json_file: str,
    json_hash: str,
    csv_file: Optional[str] = None,
    csv_hash: Optional[str] = None,
) -> Dict[str, Any]:
    """Generate manifest dictionary for the written bundle."""
    return {
        "rows": result.total_cases,
        "schema_version": SCHEMA_VERSION,
        "last_updated": result.last_updated.isoformat(),
        "files": {
            "json": json_file,
            "csv": csv_file,
        },
        "sha256_json": json_hash,
        "sha256_csv": csv_hash,
        "by_grade": dict(result.statistics.by_grade),
        "format": "foreclosure_pipeline",
        "description": "Scored open foreclosure cases",
    }


def write_bundle(
    result: PipelineResult,
    output_dir: Path,
    output_file: str = "pipeline.json",
    formats: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Write complete data bundle with files and manifest.

    Args:
        result: Pipeline result
        output_dir: Output directory (created if missing)
        output_file: JSON document filename
        formats: Formats to write (default: ['json', 'csv']); JSON is always written

    Returns:
        Manifest dictionary
    """
    if formats is None:
        formats = ["json", "csv"]

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if result.total_cases == 0:
        log.warning("No cases to write; writing an empty document")

    json_path = output_dir / output_file
    json_hash = write_json(result, json_path)

    csv_name = None
    csv_hash = None
    if "csv" in formats:
        csv_name = f"{json_path.stem}.csv"
        csv_hash = write_csv(to_dataframe(result.cases), output_dir / csv_name)

    manifest = generate_manifest(result, json_path.name, json_hash, csv_name, csv_hash)

    manifest_path = output_dir / f"{json_path.stem}_manifest.json"
    manifest_path.write_bytes(json.dumps(manifest, option=json.OPT_INDENT_2))

    log.info(f"Wrote bundle to {output_dir}")
    return manifest
