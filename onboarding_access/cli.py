from __future__ import annotations

from pathlib import Path

import typer
from dotenv import load_dotenv
from rich import print

from .checkers import stale_field_references
from .checklist import compute_access_checklist, generate_short_missing_access_text
from .config import configure_logging, get_settings
from .extract import load_answers
from .report import item_status, write_report

load_dotenv()
app = typer.Typer(add_completion=False, no_args_is_help=True)

STATUS_STYLE = {
    "PRESENT": "green",
    "MISSING": "red",
    "NOT_APPLICABLE": "dim",
}


@app.command()
def checklist(
    answers: str = typer.Option(..., help="Path to the answers file (JSON snapshot/rows or XLSX export)"),
    out_dir: str = typer.Option("output", help="Output directory for access_report.csv and summary.json"),
    short: bool = typer.Option(False, help="Print the one-line summary instead of the full request text"),
):
    """Compute the access checklist for one client's onboarding answers."""

    configure_logging(get_settings().log_level)

    answers_path = Path(answers)
    if not answers_path.exists():
        raise typer.BadParameter(f"Answers file not found: {answers}")

    try:
        answers_by_step = load_answers(str(answers_path))
    except ValueError as e:
        raise typer.BadParameter(str(e))

    result = compute_access_checklist(answers_by_step)
    report = write_report(result, out_dir)

    print("\n[bold]Access Checklist[/bold]")
    for item in result.items:
        status = item_status(item)
        style = STATUS_STYLE[status]
        print(f"  [{style}]{status:<15}[/{style}] {item.label}")
    print(
        f"Missing: [bold]{result.missing_count}[/bold]  "
        f"Present: {result.present_count}  "
        f"N/A: {result.not_applicable_count}"
    )

    print()
    if short:
        print(generate_short_missing_access_text(result))
    else:
        print(result.missing_access_text)

    print("\nOutputs:")
    print(f"  - {report['report_csv']}")
    print(f"  - {report['summary_json']}")


@app.command("check-fields")
def check_fields():
    """Verify every field the checkers read still exists in the step definitions."""

    stale = stale_field_references()
    if stale:
        print("[bold red]Stale field references:[/bold red]")
        for ref in stale:
            print(f"  - {ref}")
        raise typer.Exit(code=1)
    print("All checker field references are valid.")


if __name__ == "__main__":
    app()
