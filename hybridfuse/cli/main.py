"""hybridfuse Command Line Interface."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from hybridfuse import __version__
from hybridfuse.core.config import HybridFuseConfig, LogLevel, load_config
from hybridfuse.core.exceptions import HybridFuseError
from hybridfuse.core.models import FusionAlgorithm, ResultSet, SearchSourceKind
from hybridfuse.fusion.engine import FusionEngine

console = Console()
err_console = Console(stderr=True)

ALGORITHM_CHOICES = [algorithm.value for algorithm in FusionAlgorithm]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_result_set(path: str, source: SearchSourceKind) -> ResultSet:
    """Read a JSON list of ``{"id", "score"}`` records or ``[id, score]`` pairs."""
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("hits", [])
    return ResultSet.from_pairs(data, source=source)


@click.group()
@click.version_option(version=__version__, prog_name="hybridfuse")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in LogLevel]),
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """
    hybridfuse CLI.

    Fuse vector and keyword search results into a single ranking.
    """
    ctx.ensure_object(dict)
    settings = load_config(config)
    _setup_logging(log_level or settings.log_level.value)
    ctx.obj["config"] = settings


@cli.command()
@click.argument("vector_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("keyword_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--alpha", "-a", type=float, help="Vector weight (0 = keyword only, 1 = vector only)")
@click.option("--limit", "-l", type=int, help="Number of results")
@click.option("--algorithm", type=click.Choice(ALGORITHM_CHOICES), help="Fusion algorithm")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--explain", is_flag=True, help="Show how each score was computed")
@click.pass_context
def fuse(
    ctx: click.Context,
    vector_file: str,
    keyword_file: str,
    alpha: Optional[float],
    limit: Optional[int],
    algorithm: Optional[str],
    as_json: bool,
    explain: bool,
) -> None:
    """Fuse a vector result file with a keyword result file."""
    config: HybridFuseConfig = ctx.obj["config"]

    try:
        vector = _load_result_set(vector_file, SearchSourceKind.VECTOR)
        keyword = _load_result_set(keyword_file, SearchSourceKind.KEYWORD)
    except (ValueError, TypeError, HybridFuseError) as e:
        console.print(f"[red]Invalid result file: {e}[/red]")
        sys.exit(1)

    engine = FusionEngine(config.fusion)
    try:
        fused = engine.fuse(vector, keyword, alpha=alpha, limit=limit, algorithm=algorithm)
    except HybridFuseError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if as_json:
        payload = fused.model_dump(mode="json")
        click.echo(json.dumps(payload, indent=2))
        return

    if not fused.hits:
        console.print("[yellow]No results[/yellow]")
        return

    algorithm_name = getattr(fused.algorithm, "value", fused.algorithm)
    table = Table(title=f"{algorithm_name} (alpha={fused.alpha:g})")
    table.add_column("#", justify="right")
    table.add_column("Object ID", style="cyan")
    table.add_column("Fused", justify="right", style="green")
    table.add_column("Vector", justify="right")
    table.add_column("Keyword", justify="right")
    if explain:
        table.add_column("Explain", style="dim")

    for position, hit in enumerate(fused.hits, start=1):
        row = [
            str(position),
            hit.object_id,
            f"{hit.fused_score:.4f}",
            f"{hit.vector_component:.4f}",
            f"{hit.keyword_component:.4f}",
        ]
        if explain:
            row.append(hit.explain_score)
        table.add_row(*row)

    console.print(table)


@cli.command("retrieval-limit")
@click.argument("limit", type=int)
@click.option("--algorithm", type=click.Choice(ALGORITHM_CHOICES), help="Fusion algorithm")
@click.pass_context
def retrieval_limit(ctx: click.Context, limit: int, algorithm: Optional[str]) -> None:
    """Show how many candidates each source should return for LIMIT results."""
    config: HybridFuseConfig = ctx.obj["config"]

    try:
        size = FusionEngine(config.fusion).retrieval_limit(limit, algorithm)
    except HybridFuseError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print(size)


@cli.group("config")
def config_group() -> None:
    """Configuration commands."""
    pass


@config_group.command("init")
@click.argument("path", type=click.Path(dir_okay=False), default="hybridfuse.yaml")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
def config_init(path: str, force: bool) -> None:
    """Write a default configuration file."""
    config_file = Path(path)
    if config_file.exists() and not force:
        console.print(f"[red]Config file already exists: {config_file}[/red]")
        sys.exit(1)

    HybridFuseConfig().to_yaml(config_file)
    console.print(f"[green]Configuration written to {config_file}[/green]")


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration."""
    config: HybridFuseConfig = ctx.obj["config"]
    click.echo(json.dumps(config.model_dump(mode="json"), indent=2))


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
