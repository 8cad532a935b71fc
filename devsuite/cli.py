"""
Command-line interface for GitHub DevSuite.
"""

import json
from datetime import datetime, timezone
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.table import Table

from devsuite.checks.base import CheckStatus, RepositorySnapshot
from devsuite.classifier import RuleSet, classify, classify_issues
from devsuite.config import (
    get_label_rules,
    get_webhook_secret,
    is_repository_excluded,
    set_verify_ssl,
)
from devsuite.health import (
    HealthReport,
    analyze_snapshots,
    health_label,
    summarize_reports,
)
from devsuite.http_client import close_http_client
from devsuite.vcs import get_vcs_provider, parse_repository_spec
from devsuite.webhook import handle_event, verify_signature

# --- Typer App ---
app = typer.Typer(help="Repository health scores and issue label suggestions.")
console = Console()

STATUS_STYLES = {
    CheckStatus.PASS: ("green", "✓ pass"),
    CheckStatus.WARNING: ("yellow", "! warning"),
    CheckStatus.FAIL: ("red", "✗ fail"),
}

# --- Helper Functions ---


def _score_color(score: int) -> str:
    if score < 50:
        return "red"
    if score < 80:
        return "yellow"
    return "green"


def _load_rules() -> RuleSet:
    try:
        return get_label_rules()
    except ValueError as e:
        console.print(f"[yellow]⚠️  {e}[/yellow]")
        raise typer.Exit(code=1) from None


def _get_provider():
    try:
        return get_vcs_provider("github")
    except ValueError as e:
        console.print(f"[yellow]⚠️  {e}[/yellow]")
        raise typer.Exit(code=1) from None


def fetch_snapshots(repositories: list[str]) -> list[RepositorySnapshot]:
    """
    Fetch snapshots for ``owner/repo`` specifications.

    Invalid, excluded or unreachable repositories are reported and skipped.
    """
    provider = _get_provider()
    snapshots = []
    for spec in repositories:
        try:
            owner, name = parse_repository_spec(spec)
        except ValueError as e:
            console.print(f"  -> [yellow]⚠️  {e}[/yellow]")
            continue

        full_name = f"{owner}/{name}"
        if is_repository_excluded(full_name):
            console.print(
                f"  -> Skipping [bold yellow]{full_name}[/bold yellow] (excluded)"
            )
            continue

        console.print(f"  -> Fetching [bold cyan]{full_name}[/bold cyan]...")
        try:
            snapshots.append(provider.get_snapshot(owner, name))
        except (ValueError, httpx.HTTPError) as e:
            console.print(
                f"    [yellow]⚠️  Unable to analyze {full_name}: {e}[/yellow]"
            )
    return snapshots


def display_reports(reports: list[HealthReport]):
    """Display health reports in a rich table."""
    table = Table(title="Repository Health Report")
    table.add_column("Repository", justify="left", style="cyan", no_wrap=True)
    table.add_column("Score", justify="center", style="magenta")
    table.add_column("Health Status", justify="left")
    table.add_column("Key Observations", justify="left")

    for report in reports:
        color = _score_color(report.score)
        observations = report.recommendations
        if observations:
            observation_text = " • ".join(observations[:2])
            if len(observations) > 2:
                observation_text += f" (+{len(observations) - 2} more)"
        else:
            observation_text = "No significant concerns detected"

        table.add_row(
            report.full_name,
            f"[{color}]{report.score}/100[/{color}]",
            f"[{color}]{health_label(report.score)}[/{color}]",
            observation_text,
        )

    console.print(table)


def display_reports_detailed(reports: list[HealthReport]):
    """Display every check for each repository."""
    for report in reports:
        color = _score_color(report.score)
        console.print(f"\n📦 [bold cyan]{report.full_name}[/bold cyan]")
        console.print(f"   Health Score: [{color}]{report.score}/100[/{color}]")

        checks_table = Table(show_header=True, header_style="bold magenta")
        checks_table.add_column("Check", style="cyan", no_wrap=True)
        checks_table.add_column("Status", justify="left")
        checks_table.add_column("Observation", justify="left")
        checks_table.add_column("Recommendation", justify="left")

        for check in report.checks:
            style, text = STATUS_STYLES[check.status]
            checks_table.add_row(
                check.name,
                f"[{style}]{text}[/{style}]",
                check.description,
                check.recommendation or "",
            )

        console.print(checks_table)


@app.command()
def health(
    repositories: list[str] = typer.Argument(
        ...,
        help="Repositories to analyze in 'owner/repo' form (e.g., 'psf/requests').",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Display every check for each repository.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
):
    """Score the health of one or more GitHub repositories."""
    set_verify_ssl(not insecure)
    console.print(f"🔍 Analyzing {len(repositories)} repository(ies)...")

    try:
        snapshots = fetch_snapshots(repositories)
    finally:
        close_http_client()

    if not snapshots:
        console.print("No results to display.")
        raise typer.Exit(code=1)

    reports = analyze_snapshots(snapshots, datetime.now(timezone.utc))
    if verbose:
        display_reports_detailed(reports)
    else:
        display_reports(reports)

    if len(reports) > 1:
        summary = summarize_reports(reports)
        console.print(
            f"\n📊 Average score: [bold]{summary.average_score:.0f}/100[/bold] "
            f"across {summary.repository_count} repositories"
        )
        if summary.failing_checks:
            worst = sorted(
                summary.failing_checks.items(), key=lambda item: (-item[1], item[0])
            )
            console.print(
                "   Most common gaps: "
                + ", ".join(f"{name} ({count})" for name, count in worst[:3])
            )


@app.command()
def labels(
    repository: str = typer.Argument(..., help="Repository in 'owner/repo' form."),
    state: str = typer.Option(
        "all", "--state", "-s", help="Issue state to analyze: open, closed or all."
    ),
    limit: int = typer.Option(
        10, "--limit", "-n", min=1, max=100, help="Number of issues to analyze."
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
):
    """Suggest labels for a repository's issues."""
    set_verify_ssl(not insecure)
    try:
        owner, name = parse_repository_spec(repository)
    except ValueError as e:
        console.print(f"[yellow]⚠️  {e}[/yellow]")
        raise typer.Exit(code=1) from None

    rule_set = _load_rules()
    provider = _get_provider()
    try:
        issues = provider.get_issues(owner, name, state=state, limit=limit)
    except (ValueError, httpx.HTTPError) as e:
        console.print(f"[yellow]⚠️  Unable to load issues: {e}[/yellow]")
        raise typer.Exit(code=1) from None
    finally:
        close_http_client()

    suggestions = classify_issues(issues, rule_set)
    if not suggestions:
        console.print("No issues to analyze.")
        return

    table = Table(title=f"Label Suggestions for {owner}/{name}")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title", justify="left")
    table.add_column("Current", justify="left", style="dim")
    table.add_column("Suggested", justify="left", style="green")
    table.add_column("Confidence", justify="center", style="magenta")

    for suggestion in suggestions:
        table.add_row(
            str(suggestion.number or ""),
            suggestion.title,
            ", ".join(suggestion.current_labels),
            ", ".join(suggestion.suggested_labels),
            f"{suggestion.confidence}%",
        )

    average_confidence = sum(s.confidence for s in suggestions) / len(suggestions)
    console.print(table)
    console.print(
        f"Analyzed {len(suggestions)} issue(s) for auto-labeling "
        f"(average confidence {average_confidence:.0f}%)"
    )


@app.command(name="classify")
def classify_text(
    title: str = typer.Argument(..., help="Issue or pull request title."),
    body: str = typer.Option("", "--body", "-b", help="Issue or pull request body."),
):
    """Suggest labels for a single title and body."""
    result = classify(title, body, _load_rules())
    console.print(f"Labels: [bold green]{', '.join(result.labels)}[/bold green]")
    console.print(f"Confidence: [magenta]{result.confidence}%[/magenta]")


@app.command()
def rules():
    """Display the configured label rules."""
    rule_set = _load_rules()

    table = Table(title="Label Rules", show_header=True, header_style="bold magenta")
    table.add_column("Label", style="cyan", no_wrap=True)
    table.add_column("Active", justify="center")
    table.add_column("Keywords", justify="left")
    table.add_column("Description", justify="left", style="dim")

    for rule in rule_set.rules:
        active = "[green]on[/green]" if rule.active else "[dim]off[/dim]"
        table.add_row(rule.label, active, ", ".join(rule.keywords), rule.description)

    console.print(table)


@app.command()
def webhook_check(
    event: str = typer.Argument(..., help="Value of the X-GitHub-Event header."),
    payload_file: Path = typer.Argument(..., help="Path to the saved JSON payload."),
    signature: str | None = typer.Option(
        None, "--signature", help="Value of the X-Hub-Signature-256 header."
    ),
):
    """Replay a saved webhook delivery through the auto-labeler."""
    if not payload_file.is_file():
        console.print(f"[yellow]⚠️  Payload file not found: {payload_file}[/yellow]")
        raise typer.Exit(code=1)

    body = payload_file.read_bytes()
    secret = get_webhook_secret()
    if secret and not verify_signature(secret, body, signature):
        console.print("[red]Unauthorized: invalid or missing signature[/red]")
        raise typer.Exit(code=1)
    if not secret:
        console.print(
            "[dim]Note: No webhook secret configured; skipping signature check[/dim]"
        )

    rule_set = _load_rules()
    try:
        payload = json.loads(body)
        outcome = handle_event(event, payload, rule_set)
    # JSONDecodeError, UnicodeDecodeError and WebhookError are all ValueErrors
    except ValueError as e:
        console.print(f"[yellow]⚠️  Unable to process payload: {e}[/yellow]")
        raise typer.Exit(code=1) from None

    console.print_json(data=outcome.to_dict())


if __name__ == "__main__":
    app()
