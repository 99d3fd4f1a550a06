"""CLI entry point for rust-imports."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from .analyzer import analyze_files
from .output import display_results, results_to_json

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="List the external crates a Rust source file depends on"
    )
    parser.add_argument(
        "targets",
        help="Rust files to analyze",
        type=Path,
        nargs="+",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of tables",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output",
    )
    return parser.parse_args()


def validate_target(target: Path) -> str | None:
    """Return an error message if the target cannot be analyzed, else None."""
    if not target.exists():
        return f"File {target} does not exist"
    if not target.is_file():
        return f"{target} is not a file"
    if target.suffix != ".rs":
        return f"{target} is not a Rust file"
    return None


def main() -> None:
    """Run the CLI application."""
    console = Console()
    args = parse_args()

    # Configure logging
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logger.debug("Debug logging enabled")

    # Validate target files
    for target in args.targets:
        error = validate_target(target)
        if error is not None:
            console.print(f"[red]Error: {error}[/red]")
            sys.exit(1)

    analyses = analyze_files(args.targets)

    if args.json:
        # Unstyled, so the output stays valid JSON
        print(results_to_json(analyses))  # noqa: T201
    else:
        display_results(console, analyses)

    if not all(analysis.ok for analysis in analyses):
        sys.exit(1)


if __name__ == "__main__":
    main()
