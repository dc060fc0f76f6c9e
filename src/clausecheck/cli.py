"""
Command-line interface for clausecheck.
"""

import json
from pathlib import Path
from typing import Optional

import click
import structlog

from clausecheck.config import get_settings

logger = structlog.get_logger(__name__)

LEVEL_COLORS = {
    "SAFE": "green",
    "MODERATE RISK": "yellow",
    "HIGH RISK": "red",
    "DANGEROUS": "magenta",
}


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """clausecheck: risk analysis for freelance contracts."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    if debug:
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(10),
        )


# =========================================================================
# Analysis Commands
# =========================================================================


@cli.command()
@click.argument("contract_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--language",
    type=click.Choice(["en", "hi"]),
    default=None,
    help="Explanation language (defaults to DEFAULT_LANGUAGE)",
)
@click.option("--explain/--no-explain", default=False, help="Generate LLM explanations")
@click.option("--json", "as_json", is_flag=True, help="Print the full report as JSON")
@click.option("--output", "-o", type=click.Path(), help="Write the JSON report to a file")
def analyze(
    contract_path: str,
    language: Optional[str],
    explain: bool,
    as_json: bool,
    output: Optional[str],
) -> None:
    """Analyze a contract file (.txt, .pdf or .docx)."""
    from clausecheck.services.analysis_service import get_analysis_service
    from clausecheck.services.contract_loader import get_contract_loader

    try:
        document = get_contract_loader().load_file(contract_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    report = get_analysis_service().run(document, language=language, explain=explain)
    payload = report.model_dump(mode="json")

    if output:
        Path(output).write_text(json.dumps(payload, indent=2, ensure_ascii=False))
        click.echo(f"Report written to: {output}")

    if as_json:
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    summary = report.analysis
    click.echo(f"\n=== {report.document.file_name} ===\n")
    click.echo(
        "Risk Score: "
        + click.style(
            f"{summary.overall_risk_score}/100 ({summary.risk_level})",
            fg=LEVEL_COLORS.get(summary.risk_level),
            bold=True,
        )
    )
    click.echo(f"Clauses: {summary.total_clauses}")
    click.echo(f"Risky Clauses: {summary.risky_clauses_found}")
    click.echo(f"Breakdown: {summary.breakdown}")

    for clause in report.risky_clauses:
        click.echo(f"\n[{clause.id}] {clause.violation_type} - {clause.risk_level.value} ({clause.risk_score} pts)")
        click.echo(f"    Law: {clause.law_reference.section} ({clause.law_reference.title})")
        click.echo(f"    Keywords: {', '.join(clause.matched_keywords)}")
        click.echo(f"    {clause.explanation.simple_explanation}")

    if report.deviations:
        click.echo("\nDeviations from a fair contract:")
        for deviation in report.deviations:
            click.echo(
                f"  [{deviation.deviation_level.value}] {deviation.category}: "
                f"{deviation.found_in_contract} (fair: {deviation.fair_standard})"
            )

    click.echo(f"\n{report.disclaimer}")


# =========================================================================
# Knowledge Commands
# =========================================================================


@cli.command()
def patterns() -> None:
    """Show the patterns used for analysis."""
    from clausecheck.storage.pattern_store import get_pattern_store

    snapshot = get_pattern_store().snapshot()

    click.echo(f"\n=== Patterns ({snapshot.source}, version {snapshot.version}) ===\n")
    for pattern in snapshot.patterns:
        click.echo(
            f"  {pattern.violation_type}: {pattern.risk_level.value} "
            f"({pattern.risk_score} pts, {pattern.section_number})"
        )
        click.echo(f"    keywords: {', '.join(pattern.keywords) or '(none)'}")

    if snapshot.baselines:
        click.echo("\nFair baselines:")
        for baseline in snapshot.baselines:
            click.echo(f"  {baseline.category}: {baseline.fair_standard}")


@cli.command()
def init_db() -> None:
    """Create the knowledge schema and seed the default patterns and baselines."""
    from clausecheck.storage.defaults import DEFAULT_PATTERN_SET, SEED_FAIR_BASELINES
    from clausecheck.storage.knowledge_db import get_knowledge_database

    database = get_knowledge_database()
    database.seed(DEFAULT_PATTERN_SET, SEED_FAIR_BASELINES)
    click.echo(
        f"Seeded {len(DEFAULT_PATTERN_SET.patterns)} patterns "
        f"(version {DEFAULT_PATTERN_SET.version}) and {len(SEED_FAIR_BASELINES)} baselines "
        f"into {database.database_url}"
    )


@cli.command()
@click.argument("act_path", type=click.Path(exists=True, dir_okay=False))
def load_act(act_path: str) -> None:
    """Parse a local copy of the Indian Contract Act and store its sections."""
    from clausecheck.services.act_loader import get_act_loader

    try:
        count = get_act_loader().load(act_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    if not count:
        click.echo("No sections found.", err=True)
        return
    click.echo(f"Stored {count} sections.")


# =========================================================================
# Server & Config Commands
# =========================================================================


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    click.echo(f"Starting clausecheck API server on {host}:{port}")

    uvicorn.run(
        "clausecheck.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


@cli.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    click.echo("\n=== clausecheck Configuration ===\n")
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"Debug: {settings.debug}")
    click.echo(f"Log Level: {settings.log_level}")
    click.echo(f"\nKnowledge DB: {settings.knowledge_db_url}")
    click.echo(f"\nPrimary LLM: {settings.primary_llm_provider} ({settings.primary_llm_model})")
    click.echo(f"Fallback LLM: {settings.fallback_llm_provider} ({settings.fallback_llm_model})")
    click.echo(f"Explanations: {'enabled' if settings.explanations_enabled else 'disabled'}")
    click.echo(f"Default Language: {settings.default_language}")
    click.echo(f"LLM Configured: {settings.llm_configured}")
    click.echo(f"\nAllowed Extensions: {', '.join(settings.allowed_extensions)}")
    click.echo(f"Max Upload: {settings.max_upload_bytes // (1024 * 1024)}MB")


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
