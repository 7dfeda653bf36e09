"""
edgeval CLI — the main entry point.

Usage:
    edgeval sample f32 --count 20 --seed 0x2921f1bd8ba9c6b6
    edgeval sample i64 --category special
    edgeval list-types
    edgeval setup --seed 1234
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

import typer
from rich import box
from rich.table import Table

from edgeval import __version__
from edgeval import config
from edgeval.config import parse_seed, save_config
from edgeval.float_utils import classify, to_bits
from edgeval.generator import EdgeCaseGenerator
from edgeval.models import (
    FLOAT_FORMATS,
    INT_KINDS,
    FloatCategory,
    IntCategory,
    Sample,
    SampleReport,
)
from edgeval.ui import (
    console,
    print_banner,
    print_run_info,
    print_samples,
    print_section,
    print_summary,
    setup_logging,
)

app = typer.Typer(
    name="edgeval",
    help="⚡ Edge-case value generator — NaNs, subnormals and extremes on demand.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

MAX_COUNT = 100_000


def _version_callback(value: bool):
    if value:
        console.print(f"edgeval v{__version__}")
        raise typer.Exit()


def _categories_for(type_name: str) -> list[str]:
    if type_name in FLOAT_FORMATS:
        return [c.value for c in FloatCategory]
    return [c.value for c in IntCategory]


def _make_sample(type_name: str, category: str, value) -> Sample:
    if type_name in FLOAT_FORMATS:
        fmt = FLOAT_FORMATS[type_name]
        return Sample(
            type_name=type_name,
            category=category,
            value=str(value),
            bits=f"{to_bits(value, fmt):#0{fmt.bits // 4 + 2}x}",
            float_class=classify(value),
        )
    return Sample(type_name=type_name, category=category, value=str(value))


def run_samples(
    gen: EdgeCaseGenerator,
    type_name: str,
    count: int,
    category: str | None = None,
) -> list[Sample]:
    """Draw `count` values of one type, optionally restricted to a category."""
    samples = []
    for _ in range(count):
        if category:
            value = gen.of_category(type_name, category)
        else:
            value = gen.value(type_name)
        samples.append(_make_sample(type_name, category or "any", value))
    return samples


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-V", help="Show version and exit.", callback=_version_callback, is_eager=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """edgeval — random values biased toward edge cases."""
    setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        print_banner()


# ─── SAMPLE COMMAND ──────────────────────────────────────────────────────────

@app.command()
def sample(
    type_name: str = typer.Argument(..., help="Type to generate, e.g. f32, f64, u8, i128 (see list-types)"),
    count: int = typer.Option(10, "--count", "-n", help="Number of values to generate"),
    seed: Optional[str] = typer.Option(
        None,
        "--seed", "-s",
        help="64-bit seed (decimal or 0x hex). Default: configured seed or entropy",
    ),
    category: Optional[str] = typer.Option(
        None,
        "--category", "-c",
        help="Restrict to one category (floats: normal, subnormal, nan, special; ints: special, general)",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output", "-o",
        help="Output file path for JSON report",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet", "-q",
        help="Minimal output (no banner, no run info)",
    ),
):
    """
    🎲 Generate values of one numeric type.

    Prints every value with its raw bits and IEEE-754 class (floats),
    plus the seed that reproduces the run.
    """
    type_name = type_name.lower()
    if type_name not in FLOAT_FORMATS and type_name not in INT_KINDS:
        console.print(f"[danger]Error: Unknown type '{type_name}'. Run 'edgeval list-types'.[/danger]")
        raise typer.Exit(1)

    if category is not None:
        category = category.lower()
        allowed = _categories_for(type_name)
        if category not in allowed:
            console.print(
                f"[danger]Error: Unknown category '{category}' for {type_name}, "
                f"expected one of: {', '.join(allowed)}[/danger]"
            )
            raise typer.Exit(1)

    if count < 1 or count > MAX_COUNT:
        console.print(f"[danger]Error: --count must be between 1 and {MAX_COUNT}[/danger]")
        raise typer.Exit(1)

    if seed is not None:
        run_seed = parse_seed(seed)
        if run_seed is None:
            console.print(f"[danger]Error: Invalid seed '{seed}', expected a 64-bit unsigned integer[/danger]")
            raise typer.Exit(1)
        gen = EdgeCaseGenerator.with_seed(run_seed)
    else:
        gen = EdgeCaseGenerator.new()
        run_seed = gen.get_seed()

    if not quiet:
        print_banner(small=True)
        print_run_info(type_name, count, run_seed, category or "any")

    report = SampleReport(
        run_id=str(uuid.uuid4())[:8],
        type_name=type_name,
        count=count,
        seed=run_seed,
        category=category or "any",
    )
    report.samples = run_samples(gen, type_name, count, category)
    report.completed_at = datetime.now(timezone.utc)

    if not quiet:
        print_section("Samples", "🎲")
    print_samples(report.samples)
    if not quiet:
        print_summary(report)
        console.print(f"  [muted]Reproduce with --seed {run_seed:#018x}[/muted]")

    if output:
        from edgeval.reporters.json_report import generate_json_report

        if generate_json_report(report, output):
            console.print(f"\n  [success]✔ JSON report saved to {output}[/success]")
        else:
            console.print(f"\n  [danger]Failed to write report to {output}[/danger]")
            raise typer.Exit(1)


# ─── LIST TYPES ──────────────────────────────────────────────────────────────

@app.command("list-types")
def list_types():
    """📋 List all supported numeric types."""
    print_banner(small=True)
    console.print()

    table = Table(
        box=box.SIMPLE_HEAVY,
        title="[bold cyan]Supported Types[/bold cyan]",
        border_style="dim cyan",
        padding=(0, 2),
    )
    table.add_column("Type", style="type_name")
    table.add_column("Bits", justify="right")
    table.add_column("Range", style="muted")
    table.add_column("Categories", style="muted")

    for fmt in FLOAT_FORMATS.values():
        table.add_row(
            fmt.name,
            str(fmt.bits),
            f"1 sign / {fmt.exponent_bits} exponent / {fmt.mantissa_bits} mantissa",
            ", ".join(_categories_for(fmt.name)),
        )
    for kind in INT_KINDS.values():
        table.add_row(
            kind.name,
            str(kind.bits),
            f"[{kind.min}, {kind.max}]",
            ", ".join(_categories_for(kind.name)),
        )

    console.print(table)
    console.print()


# ─── SETUP COMMAND ───────────────────────────────────────────────────────────

@app.command()
def setup(
    seed: Optional[str] = typer.Option(None, "--seed", "-s", help="Default seed for the thread-local generator"),
    clear: bool = typer.Option(False, "--clear", help="Remove the configured seed (use system entropy)"),
):
    """
    ⚙ Configure the default seed.

    Saves to ~/.edgeval/config.json. The EDGEVAL_SEED environment
    variable takes precedence over the file.
    """
    if clear == (seed is not None):
        console.print("[danger]Error: Specify exactly one of --seed or --clear[/danger]")
        raise typer.Exit(1)

    if clear:
        save_config(None)
        console.print(f"  [success]✔ Default seed removed from {config.CONFIG_FILE}[/success]")
        return

    parsed = parse_seed(seed)
    if parsed is None:
        console.print(f"[danger]Error: Invalid seed '{seed}', expected a 64-bit unsigned integer[/danger]")
        raise typer.Exit(1)

    save_config(parsed)
    console.print(f"  [success]✔ Default seed {parsed:#018x} saved to {config.CONFIG_FILE}[/success]")


if __name__ == "__main__":
    app()
