"""Main CLI entry point using Typer."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown

from ..ci import RESULTS_JSON_PATH_INPUT, get_action_input, github_output_sink
from ..report.formatter import process_results
from ..report.writer import ReportWriter
from ..utils.logging import setup_logging
from .config import Config

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="twistlock-md",
    help="Convert Twistlock/Prisma Cloud scan results into Markdown tables and summaries",
    add_completion=False,
)

# Create Rich console for output
console = Console()

# Global config
config: Optional[Config] = None


@app.callback()
def main(
    config_file: Optional[str] = typer.Option(
        None,
        "--config",
        help="YAML config file (default: ./.twistlock-md.yaml or $TWISTLOCK_MD_CONFIG)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Twistlock Results to Markdown - CI-friendly scan report tables."""
    global config

    # Load configuration
    try:
        config = Config.load(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"✗ Invalid configuration: {e}", style="bold red")
        raise typer.Exit(code=1)

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    try:
        setup_logging(level=log_level, verbose=verbose)
    except ValueError as e:
        console.print(f"✗ {e}", style="bold red")
        raise typer.Exit(code=1)

    # Disable colors if requested
    console.no_color = no_color


@app.command()
def version():
    """Show version information."""
    from .. import __version__

    console.print(f"twistlock-md version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")


@app.command()
def convert(
    file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Path to the Twistlock/Prisma scan results JSON file (default: action input results-json-path)",
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Directory for the Markdown files (default: current directory)"
    ),
    sort_severity: bool = typer.Option(
        False, "--sort-severity", help="Order summary rows from most to least severe"
    ),
    strict: bool = typer.Option(False, "--strict", help="Exit with code 1 when the report has no results"),
    render: bool = typer.Option(False, "--render", help="Render Markdown in the terminal instead of printing it raw"),
    github_output: bool = typer.Option(
        True,
        "--github-output/--no-github-output",
        help="Publish file locations as step outputs when $GITHUB_OUTPUT is set",
    ),
):
    """Convert scan results into Markdown tables and summaries.

    Writes four files:
    - twistlock-vulnerability-table.md
    - twistlock-compliance-table.md
    - twistlock-summary-table.md
    - twistlock-compliance-summary-table.md

    Examples:
        # Convert a local scan result
        twistlock-md convert --file scanresults.json

        # Write into a separate directory, most severe rows first
        twistlock-md convert -f scanresults.json -o reports --sort-severity
    """
    cfg = config or Config()

    try:
        results_path = file or cfg.results_json_path or get_action_input(RESULTS_JSON_PATH_INPUT)
        if not results_path:
            console.print(
                "✗ Error: No scan results file. Use --file or set the results-json-path input",
                style="bold red",
            )
            raise typer.Exit(code=1)

        data = Path(results_path).read_text(encoding="utf-8")
        report = process_results(data, sort_by_rank=sort_severity or cfg.sort_severity)

        if report is None:
            console.print("⚠ Scan report contains no results, no Markdown written", style="yellow")
            raise typer.Exit(code=1 if (strict or cfg.strict) else 0)

        sink = github_output_sink() if github_output else None
        writer = ReportWriter(output_dir or cfg.output_dir, sink=sink)
        written = writer.write(report)

        for name, document in report.artifacts().items():
            if render:
                console.print(Markdown(document))
            else:
                console.print(document, markup=False, highlight=False, emoji=False, soft_wrap=True)
            logger.debug(f"{name}: {written[name]}")

        console.print(f"✓ Wrote {len(written)} Markdown files to: [cyan]{writer.output_dir}[/cyan]", soft_wrap=True)

    except typer.Exit:
        # Re-raise Typer exit codes (for early returns like missing params)
        raise
    except FileNotFoundError as e:
        console.print(f"✗ Scan results file not found: {e}", style="bold red")
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        console.print(f"✗ Scan results file is not valid JSON: {e}", style="bold red")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"✗ Error converting scan results: {e}", style="bold red")
        logger.exception("Error in convert command")
        raise typer.Exit(code=2)


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
