"""CLI for condo-reports: maintenance / income / expenses commands."""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from condo_reports.core.config import AppSettings, ObservabilityConfig, PersistenceConfig
from condo_reports.core.logging_config import setup_logging
from condo_reports.exceptions import CondoReportError, DataSourceError
from condo_reports.models import (
    AdminContact,
    BrandingAssets,
    DateRange,
    GeneratedReport,
    ReportContent,
)
from condo_reports.services.data_source import JsonDataSource
from condo_reports.services.report_service import ReportService

app = typer.Typer(name="condo-reports", help="Paginated PDF reports for condominium administration")
console = Console()


def _build_settings(output_dir: Optional[Path], verbose: bool) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    if output_dir:
        persistence = PersistenceConfig(backend="file", output_dir=output_dir)
        settings = settings.model_copy(update={"persistence": persistence})
    if verbose:
        settings = settings.model_copy(update={"observability": ObservabilityConfig(log_level="DEBUG")})
    setup_logging(settings.observability)
    return settings


def _parse_day(value: str, option: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {value!r}", param_hint=option) from exc


def _content(
    admin_company: str, admin_phone: str, admin_email: str, **fields: object
) -> ReportContent:
    admin = AdminContact(company=admin_company, phone=admin_phone, email=admin_email)
    return ReportContent(admin=admin, generated_at=datetime.now(), **fields)


def _run(coro) -> GeneratedReport:
    try:
        return asyncio.run(coro)
    except DataSourceError as exc:
        console.print(f"[red]Could not load report data:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    except CondoReportError as exc:
        console.print(f"[red]Report generation failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _print_report(report: GeneratedReport) -> None:
    table = Table(title="Generated Report")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("File", report.filename)
    table.add_row("Pages", str(report.page_count))
    table.add_row("Size", f"{len(report.content):,} bytes")
    for key, value in report.metadata.items():
        table.add_row(key, str(value))
    console.print(table)
    console.print(f"[green]Saved to {report.location}[/green]")


@app.command()
def maintenance(
    data_file: Path = typer.Argument(..., help="JSON file with maintenance collections"),
    start: str = typer.Option(..., "--start", help="First day of the period (YYYY-MM-DD)"),
    end: str = typer.Option(..., "--end", help="Last day of the period (YYYY-MM-DD)"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Directory for the PDF"),
    logo_url: Optional[str] = typer.Option(None, "--logo-url"),
    signature_url: Optional[str] = typer.Option(None, "--signature-url"),
    admin_company: str = typer.Option("", "--admin-company"),
    admin_phone: str = typer.Option("", "--admin-phone"),
    admin_email: str = typer.Option("", "--admin-email"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate the maintenance report for a date range."""
    try:
        date_range = DateRange(start=_parse_day(start, "--start"), end=_parse_day(end, "--end"))
    except ValidationError as exc:
        raise typer.BadParameter("--end must not precede --start") from exc
    service = ReportService(_build_settings(output_dir, verbose))
    branding = BrandingAssets(logo_url=logo_url, signature_url=signature_url)
    content = _content(admin_company, admin_phone, admin_email)

    async def _generate() -> GeneratedReport:
        dataset = await JsonDataSource().load_maintenance(data_file)
        return await service.generate_maintenance(dataset, date_range, content, branding)

    console.print(f"[bold]Building maintenance report {date_range.start} .. {date_range.end}[/bold]")
    _print_report(_run(_generate()))


@app.command()
def income(
    narrative_file: Path = typer.Argument(..., help="Markdown-lite narrative text"),
    kpis_file: Path = typer.Option(..., "--kpis", help="JSON file with the KPI snapshot (cents)"),
    year: Optional[int] = typer.Option(None, "--year", help="Reported year; omit for all years"),
    template_label: str = typer.Option("Reporte de ingresos", "--template-label"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir"),
    logo_url: Optional[str] = typer.Option(None, "--logo-url"),
    admin_company: str = typer.Option("", "--admin-company"),
    admin_phone: str = typer.Option("", "--admin-phone"),
    admin_email: str = typer.Option("", "--admin-email"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate the narrative income report."""
    service = ReportService(_build_settings(output_dir, verbose))
    source = JsonDataSource()

    async def _generate() -> GeneratedReport:
        narrative = await source.load_narrative(narrative_file)
        kpis = await source.load_kpis(kpis_file)
        content = _content(
            admin_company,
            admin_phone,
            admin_email,
            narrative=narrative,
            kpis=kpis,
            template_label=template_label,
        )
        return await service.generate_income(content, year, BrandingAssets(logo_url=logo_url))

    console.print(f"[bold]Building income report for {year or 'all years'}[/bold]")
    _print_report(_run(_generate()))


@app.command()
def expenses(
    data_file: Path = typer.Argument(..., help="JSON file with expense records"),
    year: int = typer.Option(..., "--year", help="Calendar year to report"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir"),
    logo_url: Optional[str] = typer.Option(None, "--logo-url"),
    signature_url: Optional[str] = typer.Option(None, "--signature-url"),
    admin_company: str = typer.Option("", "--admin-company"),
    admin_phone: str = typer.Option("", "--admin-phone"),
    admin_email: str = typer.Option("", "--admin-email"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate the yearly expense report."""
    service = ReportService(_build_settings(output_dir, verbose))
    branding = BrandingAssets(logo_url=logo_url, signature_url=signature_url)
    content = _content(admin_company, admin_phone, admin_email)

    async def _generate() -> GeneratedReport:
        dataset = await JsonDataSource().load_expenses(data_file)
        return await service.generate_expenses(dataset, year, content, branding)

    console.print(f"[bold]Building expense report for {year}[/bold]")
    _print_report(_run(_generate()))


if __name__ == "__main__":
    app()
