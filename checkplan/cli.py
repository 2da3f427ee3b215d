"""checkplan CLI.

Commands:
- context: Derive flags, areas and risk score from an estimate
- matrix: Show the area x trade matrix of an estimate
- plan: Plan checklists for a project (optionally export JSON/CSV)
- insights: Show the risk label and key findings for a project
- catalog templates|items|questions|check: Inspect the area/trade catalog
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from checkplan.config import AppConfig, get_config
from checkplan.core.logging import configure_logging
from checkplan.ingestion import load_answers, load_scope_records, load_templates
from checkplan.ingestion.templates import load_existing_checklists
from checkplan.intelligence.area_trade import build_area_trade_matrix, summarize_matrix
from checkplan.intelligence.catalog import (
    DEFAULT_CATALOG,
    CatalogError,
    ChecklistCatalog,
    get_area_trade_checklist_items,
    get_area_trade_questions,
    load_catalog,
)
from checkplan.intelligence.context import build_context
from checkplan.intelligence.insights import get_insight_bullets, get_risk_label
from checkplan.intelligence.planner import get_recommended_missing, plan_checklists
from checkplan.models import (
    AnswerSet,
    AreaType,
    ChecklistContext,
    PlannedChecklist,
    ProjectType,
    RiskLevel,
    ScopeRecord,
    TradeType,
)
from checkplan.reporting.export import export_plan

app = typer.Typer(
    name="checkplan",
    help="checkplan - Smart checklist inference and planning for remodel projects",
    no_args_is_help=True,
)
catalog_cli = typer.Typer(help="Area/trade checklist catalog")
app.add_typer(catalog_cli, name="catalog")

console = Console()

# Errors raised while loading inputs; reported without a traceback
INPUT_ERRORS = (FileNotFoundError, ValueError, CatalogError)

RISK_STYLES = {
    RiskLevel.HIGH: "red",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.LOW: "green",
}


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _project_type(config: AppConfig, project_type: ProjectType | None) -> ProjectType:
    return project_type or ProjectType(config.planner.default_project_type)


def _configured_catalog(config: AppConfig) -> ChecklistCatalog:
    if config.catalog.path is None:
        return DEFAULT_CATALOG
    return load_catalog(config.catalog.path)


def _load_inputs(scope_file: Path, answers_file: Path | None) -> tuple[list[ScopeRecord], AnswerSet]:
    records = load_scope_records(scope_file)
    answers = load_answers(answers_file) if answers_file else AnswerSet()
    return records, answers


def _risk_text(level: RiskLevel) -> str:
    style = RISK_STYLES[level]
    return f"[{style}]{level.value}[/{style}]"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging from the environment before running a command."""
    try:
        config = get_config()
    except ValueError as e:
        _fail(f"Invalid configuration: {e}")
    configure_logging("DEBUG" if verbose else config.log_level, config.log_format)


@app.command()
def context(
    scope_file: Path = typer.Argument(..., help="Scope records (JSON/YAML/CSV/XLSX)"),
    answers_file: Path | None = typer.Option(None, "--answers", "-a", help="Answers (JSON/YAML)"),
    project_type: ProjectType | None = typer.Option(None, "--project-type", "-t", help="Project type"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
):
    """Derive flags, detected areas and risk score for an estimate."""
    config = get_config()
    ptype = _project_type(config, project_type)

    try:
        records, answers = _load_inputs(scope_file, answers_file)
    except INPUT_ERRORS as e:
        _fail(str(e))

    ctx = build_context(ptype, records, answers)

    if as_json:
        _echo_json(ctx.model_dump(mode="json"))
        return

    risk = get_risk_label(ctx.risk_score)
    console.print(f"[bold]Project type:[/bold] {ptype.value}")
    console.print(f"[bold]Risk score:[/bold] {ctx.risk_score} ({_risk_text(risk.level)}: {risk.label})")

    flags_table = Table(title="Derived Flags")
    flags_table.add_column("Flag", style="cyan")
    flags_table.add_column("Value", justify="center")
    for name, value in ctx.derived_flags.model_dump().items():
        flags_table.add_row(name, "[green]yes[/green]" if value else "[dim]no[/dim]")
    for name, value in ctx.risk_flags.model_dump().items():
        flags_table.add_row(name, "[red]yes[/red]" if value else "[dim]no[/dim]")
    console.print(flags_table)

    _print_areas(ctx)


def _print_areas(ctx: ChecklistContext) -> None:
    if not ctx.detected_areas:
        console.print("[yellow]No areas detected[/yellow]")
        return

    table = Table(title="Detected Areas")
    table.add_column("Label", style="cyan")
    table.add_column("Type")
    table.add_column("Scope Record", style="dim")
    for area in ctx.detected_areas:
        table.add_row(area.label, area.type.value, area.scope_record_id)
    console.print(table)


@app.command()
def matrix(
    scope_file: Path = typer.Argument(..., help="Scope records (JSON/YAML/CSV/XLSX)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
):
    """Show which trades touch which areas."""
    try:
        records = load_scope_records(scope_file)
    except INPUT_ERRORS as e:
        _fail(str(e))

    area_trade_matrix = build_area_trade_matrix(records)

    if as_json:
        _echo_json(area_trade_matrix.model_dump(mode="json"))
        return

    table = Table(title="Area x Trade Matrix")
    table.add_column("Area", style="cyan")
    table.add_column("Type")
    table.add_column("Trades", style="green")
    trades_by_area = {s.area_key: s.trades for s in area_trade_matrix.area_trade_scopes}
    for area in area_trade_matrix.areas:
        trades = trades_by_area.get(area.key, [])
        table.add_row(area.key, area.type.value, ", ".join(t.value for t in trades) or "-")
    console.print(table)

    summary = summarize_matrix(area_trade_matrix)
    console.print(f"[bold]{summary.total_areas}[/bold] areas, [bold]{summary.total_trades}[/bold] trades")


@app.command()
def plan(
    scope_file: Path = typer.Argument(..., help="Scope records (JSON/YAML/CSV/XLSX)"),
    templates_file: Path = typer.Option(..., "--templates", help="Checklist templates (JSON/YAML)"),
    answers_file: Path | None = typer.Option(None, "--answers", "-a", help="Answers (JSON/YAML)"),
    project_type: ProjectType | None = typer.Option(None, "--project-type", "-t", help="Project type"),
    no_matrix: bool = typer.Option(False, "--no-matrix", help="Skip per-area checklists from the catalog"),
    existing_file: Path | None = typer.Option(
        None, "--existing", help="Existing checklists (JSON/YAML); recommends missing high-risk ones"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Export plan (.json or .csv)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
):
    """Plan checklists for a project."""
    config = get_config()
    ptype = _project_type(config, project_type)
    include_matrix = config.planner.include_matrix and not no_matrix

    try:
        records, answers = _load_inputs(scope_file, answers_file)
        templates = load_templates(templates_file)
        existing = load_existing_checklists(existing_file) if existing_file else None
        catalog = _configured_catalog(config)
    except INPUT_ERRORS as e:
        _fail(str(e))

    ctx = build_context(ptype, records, answers)
    area_trade_matrix = build_area_trade_matrix(records) if include_matrix else None
    planned = plan_checklists(
        ptype,
        ctx,
        templates,
        area_trade_matrix=area_trade_matrix,
        catalog=catalog,
        medium_risk_score=config.planner.medium_risk_score,
    )
    missing = get_recommended_missing(ctx, existing, templates) if existing is not None else []

    if output is not None:
        try:
            export_plan(planned, output, ctx)
        except ValueError as e:
            _fail(str(e))

    if as_json:
        payload: dict[str, Any] = {
            "project_type": ptype.value,
            "risk_score": ctx.risk_score,
            "planned_checklists": [c.model_dump(mode="json") for c in planned],
        }
        if existing is not None:
            payload["recommended_missing"] = [c.model_dump(mode="json") for c in missing]
        _echo_json(payload)
        return

    _print_plan("Planned Checklists", planned)
    if existing is not None:
        if missing:
            _print_plan("Recommended Missing", missing)
        else:
            console.print("[green]No high-risk checklists missing[/green]")
    if output is not None:
        console.print(f"[bold green]✓[/bold green] Plan exported to {output}")


def _print_plan(title: str, planned: list[PlannedChecklist]) -> None:
    if not planned:
        console.print(f"[yellow]{title}: none[/yellow]")
        return

    table = Table(title=title)
    table.add_column("Phase", style="cyan")
    table.add_column("Title")
    table.add_column("Risk", justify="center")
    table.add_column("Items", justify="right")
    table.add_column("Reasons", style="dim")
    for checklist in planned:
        table.add_row(
            checklist.phase,
            checklist.title,
            _risk_text(checklist.risk_level),
            str(checklist.item_count),
            ", ".join(checklist.reason_tags),
        )
    console.print(table)
    console.print(f"[bold]{len(planned)}[/bold] checklists")


@app.command()
def insights(
    scope_file: Path = typer.Argument(..., help="Scope records (JSON/YAML/CSV/XLSX)"),
    answers_file: Path | None = typer.Option(None, "--answers", "-a", help="Answers (JSON/YAML)"),
    project_type: ProjectType | None = typer.Option(None, "--project-type", "-t", help="Project type"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Show the risk label and key findings for a project."""
    config = get_config()
    ptype = _project_type(config, project_type)

    try:
        records, answers = _load_inputs(scope_file, answers_file)
    except INPUT_ERRORS as e:
        _fail(str(e))

    ctx = build_context(ptype, records, answers)
    risk = get_risk_label(ctx.risk_score)
    bullets = get_insight_bullets(ctx)

    if as_json:
        _echo_json(
            {
                "risk_score": ctx.risk_score,
                "label": risk.label,
                "level": risk.level.value,
                "bullets": bullets,
            }
        )
        return

    console.print(f"[bold]Risk:[/bold] {ctx.risk_score} ({_risk_text(risk.level)}) {risk.label}")
    for bullet in bullets:
        console.print(f"  • {bullet}")


@catalog_cli.command("templates")
def catalog_templates():
    """List catalog templates."""
    config = get_config()
    try:
        catalog = _configured_catalog(config)
    except CatalogError as e:
        _fail(str(e))

    table = Table(title="Area/Trade Catalog")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Areas")
    table.add_column("Trades", style="green")
    table.add_column("Project Types", style="dim")
    table.add_column("Items", justify="right")
    for template in catalog:
        table.add_row(
            template.id,
            template.name,
            ", ".join(a.value for a in template.area_types),
            ", ".join(t.value for t in template.trades),
            ", ".join(p.value for p in template.project_types) if template.project_types else "any",
            str(len(template.checklist_items)),
        )
    console.print(table)


@catalog_cli.command("items")
def catalog_items(
    area: AreaType = typer.Option(..., "--area", help="Area type"),
    trades: list[TradeType] = typer.Option(..., "--trade", help="Trade (repeatable)"),
    project_type: ProjectType | None = typer.Option(None, "--project-type", "-t", help="Project type"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Show checklist items for an area type and trades."""
    config = get_config()
    try:
        catalog = _configured_catalog(config)
    except CatalogError as e:
        _fail(str(e))

    items = get_area_trade_checklist_items(area, trades, project_type, catalog)

    if as_json:
        _echo_json([item.model_dump(mode="json") for item in items])
        return

    if not items:
        console.print("[yellow]No catalog items match[/yellow]")
        return

    table = Table(title=f"Checklist Items: {area.value}")
    table.add_column("Phase", style="cyan")
    table.add_column("Code", style="dim")
    table.add_column("Item")
    table.add_column("Risk", justify="center")
    table.add_column("Assignee")
    for item in items:
        table.add_row(
            item.phase,
            item.code,
            item.text,
            _risk_text(item.risk_level) if item.risk_level else "-",
            item.default_assignee_role or "-",
        )
    console.print(table)


@catalog_cli.command("questions")
def catalog_questions(
    area: AreaType = typer.Option(..., "--area", help="Area type"),
    trades: list[TradeType] = typer.Option(..., "--trade", help="Trade (repeatable)"),
    project_type: ProjectType | None = typer.Option(None, "--project-type", "-t", help="Project type"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Show follow-up questions for an area type and trades."""
    config = get_config()
    try:
        catalog = _configured_catalog(config)
    except CatalogError as e:
        _fail(str(e))

    questions = get_area_trade_questions(area, trades, project_type, catalog)

    if as_json:
        _echo_json([q.model_dump(mode="json") for q in questions])
        return

    if not questions:
        console.print("[yellow]No catalog questions match[/yellow]")
        return

    for question in questions:
        console.print(f"[cyan]{question.code}[/cyan]: {question.text}")
        if question.options:
            console.print(f"    [dim]options: {', '.join(question.options)}[/dim]")


@catalog_cli.command("check")
def catalog_check(
    catalog_file: Path = typer.Argument(..., help="Catalog file (YAML)"),
):
    """Validate a catalog file."""
    try:
        catalog = load_catalog(catalog_file)
    except CatalogError as e:
        _fail(str(e))

    items = sum(len(t.checklist_items) for t in catalog)
    questions = sum(len(t.questions) for t in catalog)
    console.print(
        f"[bold green]✓[/bold green] {len(catalog)} templates, {items} items, {questions} questions"
    )


if __name__ == "__main__":
    app()
