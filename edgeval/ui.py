"""
edgeval terminal UI theme.
"""

import logging

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from edgeval import __version__
from edgeval.models import FloatClass, Sample, SampleReport

# ── Custom Theme ─────────────────────────────────────────────────────────────

EDGEVAL_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "danger": "red bold",
    "success": "green bold",
    "muted": "dim white",
    "accent": "bold cyan",
    "class.zero": "bold blue",
    "class.subnormal": "magenta",
    "class.normal": "green",
    "class.infinite": "bold yellow",
    "class.nan": "bold red",
    "type_name": "bold magenta",
    "value": "green",
    "bits": "dim cyan",
})

console = Console(theme=EDGEVAL_THEME)

# ── Banner ───────────────────────────────────────────────────────────────────

BANNER = rf"""[cyan]
           _                       _
   ___  __| | __ _  ___ __   ____ _| |
  / _ \/ _` |/ _` |/ _ \ \ / / _` | |
 |  __/ (_| | (_| |  __/ \ V / (_| | |
  \___|\__,_|\__, |\___|  \_/ \__,_|_|
             |___/
[/cyan][dim white]  ──── Edge-case value generator ── v{__version__} ────[/dim white]
[dim cyan]  NaN, -0.0 and MIN are inputs too.[/dim cyan]
"""

SMALL_BANNER = f"[bold cyan]⚡ edgeval[/bold cyan] [dim]v{__version__}[/dim]"


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich. DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
    )


def print_banner(small: bool = False):
    """Print the edgeval banner."""
    if small:
        console.print(SMALL_BANNER)
    else:
        console.print(BANNER)


def print_run_info(type_name: str, count: int, seed: int, category: str = "any"):
    """Print sampling parameters box."""
    table = Table(box=box.SIMPLE_HEAVY, show_header=False, padding=(0, 2))
    table.add_column("key", style="muted", width=12)
    table.add_column("value", style="value")
    table.add_row("TYPE", type_name)
    table.add_row("CATEGORY", category)
    table.add_row("COUNT", str(count))
    table.add_row("SEED", f"{seed:#018x}")
    console.print(Panel(
        table,
        title="[bold cyan]◉ Run[/bold cyan]",
        border_style="cyan",
        padding=(1, 2),
    ))


def print_section(title: str, icon: str = "─"):
    """Print a section divider."""
    console.print()
    console.rule(f"[bold cyan] {icon} {title} [/bold cyan]", style="dim cyan")
    console.print()


def print_samples(samples: list[Sample]):
    """Print generated values as a table."""
    is_float = any(s.float_class is not None for s in samples)
    table = Table(box=box.SIMPLE_HEAVY, border_style="dim cyan", padding=(0, 2))
    table.add_column("#", style="muted", justify="right")
    table.add_column("Value", style="value")
    if is_float:
        table.add_column("Bits", style="bits")
        table.add_column("Class")

    for i, s in enumerate(samples, 1):
        if is_float:
            cls = s.float_class.value if s.float_class else ""
            table.add_row(str(i), s.value, s.bits, f"[class.{cls}]{cls}[/class.{cls}]")
        else:
            table.add_row(str(i), s.value)

    console.print(table)


def print_summary(report: SampleReport):
    """Print per-class counts for float runs."""
    counts = report.class_counts()
    if not counts:
        return

    table = Table(
        box=box.DOUBLE_EDGE,
        title="[bold white]Class Summary[/bold white]",
        border_style="cyan",
        padding=(0, 2),
    )
    table.add_column("Class", style="bold")
    table.add_column("Count", justify="right")

    for cls in FloatClass:
        n = counts.get(cls.value, 0)
        if n > 0:
            table.add_row(f"[class.{cls.value}]{cls.value.upper()}[/class.{cls.value}]", str(n))

    table.add_section()
    table.add_row("[bold white]TOTAL[/bold white]", f"[bold white]{report.count}[/bold white]")
    console.print(table)
    console.print()
