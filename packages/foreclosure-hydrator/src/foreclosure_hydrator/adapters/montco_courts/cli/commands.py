"""
CLI Commands for the Montgomery County Courts Adapter

This module provides the ``foreclosure-leads`` command-line interface:
``run`` scores a case export end to end, ``parse-address`` and ``analyze``
expose the parser and the docket analyzer/scorer for debugging.
"""

import datetime as dt
from pathlib import Path
from typing import Optional

import orjson as json
import typer
from dotenv import load_dotenv

from foreclosure_extractors.address import county_towns, parse_address
from foreclosure_extractors.docket import analyze_docket
from foreclosure_extractors.scoring import score_lead
from foreclosure_types.schemas import Case
from foreclosure_hydrator.utils.logging_utils import pipeline_logger, setup_logging

from ..config import get_default_config, load_config
from ..normalize import normalize_docket_rows
from ..providers import CaseIntakeError, CsvCaseSource, JsonDetailSource
from ..providers.json_details import parse_docket_rows
from ..usecase import LeadPipelineUseCase
from ..writer import write_bundle

load_dotenv()  # Load environment variables from .env if present

log = pipeline_logger("intake", adapter="montco_courts")

app = typer.Typer(
    name="foreclosure-leads",
    help="Score open foreclosure cases as off-market leads"
)


def _echo_json(data) -> None:
    typer.echo(json.dumps(data, option=json.OPT_INDENT_2).decode())


@app.command("run")
def run(
    cases: Optional[Path] = typer.Option(
        None, "--cases", "-c", help="Court case-search CSV export"
    ),
    details: Optional[Path] = typer.Option(
        None, "--details", "-d", help="JSON file with per-case address and docket"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Output directory"
    ),
    min_days: Optional[int] = typer.Option(
        None, "--min-days", min=0, help="Youngest case age kept"
    ),
    max_days: Optional[int] = typer.Option(
        None, "--max-days", min=0, help="Oldest case age kept"
    ),
    max_cases: Optional[int] = typer.Option(
        None, "--max-cases", min=1, help="Cases enriched per run"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Parallel enrichment workers"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", exists=True, readable=True, help="YAML config file"
    ),
    csv_export: bool = typer.Option(
        True, "--csv/--no-csv", help="Also write the flat CSV export"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also log to this file (rotated daily)"
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Write the log file as JSON lines"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
):
    """Read the case export, score candidate cases and write the pipeline bundle."""
    setup_logging(
        log_file=log_file, level="DEBUG" if verbose else "INFO", json_lines=json_logs
    )

    try:
        config = load_config(
            config_file,
            overrides={
                "cases_csv": cases,
                "details_file": details,
                "output_dir": output_dir,
                "min_days_old": min_days,
                "max_days_old": max_days,
                "max_cases": max_cases,
                "max_workers": workers,
            },
        )
    except Exception as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)

    try:
        raw_cases = CsvCaseSource(config.cases_csv).fetch_cases()
        if config.details_file is not None:
            source = JsonDetailSource.from_file(config.details_file)
        else:
            log.warning("No details file given; cases are scored without docket data")
            source = JsonDetailSource({})

        result = LeadPipelineUseCase(source, config).execute(raw_cases)
        manifest = write_bundle(
            result,
            config.output_dir,
            output_file=config.output_file,
            formats=["json", "csv"] if csv_export else ["json"],
        )
    except CaseIntakeError as e:
        log.error(f"Case intake failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    stats = result.statistics
    typer.echo(f"Scored {result.total_cases} cases")
    typer.echo(
        "Grades: " + ", ".join(f"{grade}={count}" for grade, count in stats.by_grade.items())
    )
    typer.echo(
        f"With address: {stats.with_address}, in county: {stats.in_target_county}, "
        f"missing docket data: {stats.missing_docket_data}"
    )
    if stats.enriched_cases:
        typer.echo(
            f"With assessed value: {stats.enriched_cases}, average: ${stats.avg_assessed_value:,}"
        )
    typer.echo(f"Output: {config.output_dir / manifest['files']['json']}")


@app.command("parse-address")
def parse_address_command(
    address: str = typer.Argument(..., help="Raw address text (use \\n for line breaks)"),
    default_state: Optional[str] = typer.Option(
        None, "--default-state", help="State used when none is found"
    ),
    county: Optional[str] = typer.Option(
        None, "--county", help="County whose towns mark inTargetCounty"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Parse one address and print it as JSON."""
    if verbose:
        setup_logging(level="DEBUG")

    config = get_default_config()
    try:
        towns = county_towns(county or config.county_name)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    parsed = parse_address(
        address.replace("\\n", "\n"),
        default_state=default_state or config.default_state,
        valid_states=config.valid_states,
        towns=towns,
    )
    _echo_json(parsed.model_dump(by_alias=True, mode="json"))


@app.command("analyze")
def analyze(
    docket_file: Path = typer.Argument(
        ..., exists=True, readable=True, help="JSON list of [date, description] rows"
    ),
    days_open: int = typer.Option(0, "--days-open", min=0, help="Case age in days"),
    defendant: str = typer.Option("", "--defendant", help="Defendant name"),
    now: Optional[str] = typer.Option(
        None, "--now", help="Evaluation date YYYY-MM-DD (default: today)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Analyze a docket and print its signals and lead score as JSON."""
    if verbose:
        setup_logging(level="DEBUG")

    try:
        rows = parse_docket_rows(json.loads(docket_file.read_bytes())) or []
        reference = dt.date.fromisoformat(now) if now else None
    except (json.JSONDecodeError, TypeError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    signals = analyze_docket(normalize_docket_rows(rows), now=reference)
    case = Case(case_number=docket_file.stem, defendant=defendant, days_open=days_open)
    lead = score_lead(case, signals)

    _echo_json(
        {
            "docketSummary": signals.model_dump(by_alias=True, mode="json"),
            "leadScore": lead.model_dump(by_alias=True, mode="json"),
        }
    )
