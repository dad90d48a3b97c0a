"""CLI application entry point for lookalike.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from lookalike import __version__
from lookalike.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_char_groups,
    print_dumped,
    print_error,
    print_header,
    print_inputs,
    print_matches,
    print_rules,
    print_step,
    print_success,
    print_warning,
)
from lookalike.config import (
    DEFAULT_TEST_STRING,
    ComparisonConfig,
    LoggingConfig,
    LookalikeSettings,
    RulesOfSimilarity,
)
from lookalike.core import ComparisonResult, FontComparer
from lookalike.exceptions import FontLoadError, LookalikeError
from lookalike.io import dump_glyphs, dump_groups, font_files, select_test_chars

# Create the Typer app
app = typer.Typer(
    name="lookalike",
    help="Find fonts that draw the same letterforms.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Lookalike[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def compare(
    files: Annotated[
        list[Path] | None,
        typer.Argument(
            help="Font files (TTF/OTF) to compare",
            show_default=False,
        ),
    ] = None,
    equivalence: Annotated[
        float,
        typer.Option(
            "--equivalence",
            help=(
                "How near the nearest point must be to count as the same, relative to "
                "1000 upem. Even very visually similar families differ by up to 2.5 or so."
            ),
            min=0.0,
        ),
    ] = 2.0,
    budget: Annotated[
        float,
        typer.Option(
            "--budget",
            help=(
                "Letterforms are different if the sum of squared distances to nearest "
                "exceeds this, relative to 1000 upem"
            ),
            min=0.0,
        ),
    ] = 100.0,
    error: Annotated[
        float,
        typer.Option(
            "--error",
            help="Letterforms are different if any nearest point is further apart than this",
            min=0.0,
        ),
    ] = 25.0,
    match_pct: Annotated[
        float,
        typer.Option(
            "--match-pct",
            help="Fonts match if this percentage of the test characters match",
            min=0.0,
            max=100.0,
        ),
    ] = 80.0,
    test_string: Annotated[
        str,
        typer.Option(
            "--test-string",
            help="Compare these characters to detect duplication",
        ),
    ] = DEFAULT_TEST_STRING,
    test_nam: Annotated[
        Path | None,
        typer.Option(
            "--test-nam",
            help="Use a .nam file as source of test characters, overrides --test-string",
        ),
    ] = None,
    google_fonts: Annotated[
        Path | None,
        typer.Option(
            "--google-fonts",
            help="Repository of font family directories; one exemplar per family is compared",
        ),
    ] = None,
    dump_glyph_svgs: Annotated[
        bool,
        typer.Option(
            "--dump-glyphs",
            help="Write an SVG per test character showing its variants",
        ),
    ] = False,
    dump_group_report: Annotated[
        bool,
        typer.Option(
            "--dump-groups",
            help="Write the sets of files and their common glyphs",
        ),
    ] = False,
    working_dir: Annotated[
        Path,
        typer.Option(
            "--working-dir",
            help="Where to write diagnostic files",
        ),
    ] = Path("build"),
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: compare in-process)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show the groups found for every character",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print the matching groups",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Group fonts by how they draw a set of test characters.

    Every font's outline for each test character is compared against the
    others, tolerating different control points, start points and winding.
    Sets of fonts that draw enough characters the same way are reported.

    Example:
        lookalike --match-pct 90 fonts/*.ttf
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    try:
        settings = LookalikeSettings(
            rules=RulesOfSimilarity(equivalence=equivalence, budget=budget, error=error),
            comparison=ComparisonConfig(
                match_pct=match_pct,
                test_string=test_string,
                test_nam=test_nam,
                max_workers=workers,
                dump_glyphs=dump_glyph_svgs,
                dump_groups=dump_group_report,
                working_dir=working_dir,
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "ERROR",
            ),
        )
    except ValidationError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)

    try:
        paths = font_files(files or [], google_fonts)
        chars = select_test_chars(settings.comparison)

        if not paths:
            print_warning("Not much to do with no fonts specified")
            raise typer.Exit(code=0)

        if not quiet:
            print_header(__version__)
            print_step("Loading fonts")
            print_inputs(len(paths), len(chars))

        result = _run_comparison(settings, paths, chars, quiet)

        if not quiet:
            print_rules(result.rules, result.max_upem)
            if verbose:
                print_step("Groups")
                for char in result.test_chars:
                    print_char_groups(
                        char, [sorted(g.sources) for g in result.groups.get(char, [])]
                    )

        _write_diagnostics(settings.comparison, result, quiet)

        print_matches(
            result.matching_sets(settings.comparison.match_pct),
            limit=result.match_limit(settings.comparison.match_pct),
            total=len(result.test_chars),
        )

        if not quiet:
            stats = result.stats
            print_success(
                total_time_s=stats.duration_seconds,
                chars=stats.char_count,
                groups=stats.group_count,
                inconsistent=len(stats.inconsistent_chars),
                comparisons=stats.comparisons,
            )

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except LookalikeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _run_comparison(
    settings: LookalikeSettings,
    paths: list[Path],
    chars: list[str],
    quiet: bool,
) -> ComparisonResult:
    """Run the comparison, with a progress bar unless quiet.

    Raises:
        typer.Exit: With code 130 if cancelled by the user
    """
    comparer = FontComparer(settings)
    try:
        if quiet:
            return comparer.compare(font_paths=paths, test_chars=chars)

        print_step("Comparing")
        with create_progress() as progress:
            task_id = progress.add_task(f"Comparing {len(chars)} characters", total=len(chars))

            def update_progress(completed: int, *_: object) -> None:
                progress.update(task_id, completed=completed)

            return comparer.compare(
                font_paths=paths,
                test_chars=chars,
                progress_callback=update_progress,
            )
    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice()
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code


def _write_diagnostics(config: ComparisonConfig, result: ComparisonResult, quiet: bool) -> None:
    """Write SVG and group dumps if requested."""
    if not (config.dump_glyphs or config.dump_groups):
        return
    if not quiet:
        print_step(f"Dumping to {config.working_dir}")
    if config.dump_glyphs:
        written = dump_glyphs(config.working_dir, result.groups)
        if not quiet:
            print_dumped(f"{len(written)} glyph SVGs in", config.working_dir)
    if config.dump_groups:
        report = dump_groups(config.working_dir, result.groups)
        if not quiet:
            print_dumped("Group report", report)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
