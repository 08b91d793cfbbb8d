from typing import Optional

import typer
from rich import print
from newsflow.config.settings import get_settings
from newsflow.services.artifacts import write_summary_from_files
from newsflow.services.renderer import SourceUnavailable
from newsflow.workflows.run_scrape import run_scrape
from newsflow.tools.logging_setup import setup_logging

EXIT_FAILED = 1
EXIT_SOURCE_UNAVAILABLE = 2


app = typer.Typer(help="News-flow scraper: feed.json snapshot + diff.json delta")


@app.callback()
def main():
    setup_logging()


@app.command()
def doctor():
    """Print the effective configuration."""
    s = get_settings()
    print("[bold green]Config loaded[/bold green]")
    print("Target:", s.target_url)
    print("Baseline:", s.baseline_location or "(none)")
    print("Output dir:", s.output_dir, "| Max items:", s.max_items, "| Max candidates:", s.max_candidates)
    print("Debug artifacts:", s.debug_artifacts)


@app.command()
def run(
    output_dir: Optional[str] = typer.Option(None, "--output-dir", help="Where to write the artifacts"),
    max_items: Optional[int] = typer.Option(None, "--max-items", min=0, help="Feed size cap"),
):
    """Scrape once, write feed.json, diff.json and scrape_summary.txt."""
    s = get_settings()
    overrides = {}
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if max_items is not None:
        overrides["max_items"] = max_items
    if overrides:
        s = s.model_copy(update=overrides)

    try:
        result = run_scrape(s)
    except SourceUnavailable as e:
        print(f"[bold red]Source unavailable[/bold red]: {e}")
        raise SystemExit(EXIT_SOURCE_UNAVAILABLE)
    except Exception as e:
        print(f"[bold red]Run failed[/bold red]: {e}")
        raise SystemExit(EXIT_FAILED)

    print(f"TOTAL_ITEMS={result['total_items']}")
    print(f"NEW_ITEMS={result['new_items']}")
    if not result["baseline_available"]:
        print("[yellow]No baseline feed: every item was reported as new[/yellow]")
    print("[bold green]Run complete[/bold green]")


@app.command()
def summary(
    output_dir: Optional[str] = typer.Option(None, "--output-dir", help="Directory holding feed.json/diff.json"),
):
    """Rewrite scrape_summary.txt from the artifacts on disk."""
    s = get_settings()
    result = write_summary_from_files(output_dir or s.output_dir)
    print(f"Wrote {result['summary_path']} TOTAL_ITEMS={result['total_items']} NEW_ITEMS={result['new_items']}")


if __name__ == "__main__":
    app()
