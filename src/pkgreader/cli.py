"""pkgreader: read package records from control files."""

import logging
from enum import StrEnum
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pkgreader.arch import parse_arch_list
from pkgreader.config import ParserConfig, get_config
from pkgreader.errors import StreamError
from pkgreader.models.fields import FieldMask
from pkgreader.models.package import Package
from pkgreader.parsing.decompose import parse_version
from pkgreader.parsing.dispatch import FIELDS
from pkgreader.parsing.stream import iter_packages
from pkgreader.render import control_fields, to_deb822

logger = logging.getLogger(__name__)

cli = typer.Typer(help="Read package records from control files (Packages, status, control).")
console = Console()


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    CONTROL = "control"


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                tracebacks_suppress=[typer],
            )
        ],
    )


@cli.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages"),
):
    setup_logging(logging.DEBUG if verbose else logging.INFO)


def _build_mask(fields: list[str] | None, exclude: list[str] | None) -> FieldMask:
    try:
        mask = FieldMask.from_names(fields) if fields else FieldMask.ALL
        if exclude:
            mask &= ~FieldMask.from_names(exclude)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    return mask


def _build_config(arch: list[str] | None) -> ParserConfig:
    config = get_config()
    if not arch:
        return config
    try:
        arch_list = parse_arch_list(" ".join(arch))
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--arch") from e
    return config.model_copy(update={"arch_list": arch_list})


def _package_table(package: Package) -> Table:
    table = Table(title=package.name, show_header=False, title_justify="left")
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    for name, value in control_fields(package):
        table.add_row(name, value.lstrip("\n"))
    if package.architecture is not None:
        table.add_row("Arch-Priority", str(package.arch_priority))
    return table


@cli.command()
def show(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Control file to read (may be .gz)"),
    fields: list[str] | None = typer.Option(None, "--field", "-f", help="Only parse this field (repeatable)"),
    exclude: list[str] | None = typer.Option(None, "--exclude", "-x", help="Skip this field (repeatable)"),
    output: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", help="Output format"),
    arch: list[str] | None = typer.Option(None, "--arch", "-a", help="Architecture priority as NAME:PRIO"),
):
    """Print every package record in a control file."""
    mask = _build_mask(fields, exclude)
    config = _build_config(arch)

    count = 0
    try:
        for package in iter_packages(path, mask, config):
            count += 1
            match output:
                case OutputFormat.TABLE:
                    console.print(_package_table(package))
                case OutputFormat.JSON:
                    typer.echo(package.model_dump_json(exclude_none=True))
                case OutputFormat.CONTROL:
                    typer.echo(to_deb822(package).dump())
    except StreamError as e:
        typer.echo(f"Error reading {path}: {e}", err=True)
        raise typer.Exit(code=1) from e

    logger.info(f"Read {count} package(s) from {path}")


@cli.command("fields")
def list_fields():
    """List the recognized control fields."""
    forced = get_config().forced_mask
    table = Table("Field", "Mask", "Forced off")
    for spec in FIELDS:
        table.add_row(spec.name, spec.mask.name, "yes" if spec.mask in forced else "")
    console.print(table)


@cli.command()
def version(value: str = typer.Argument(..., help="Version string, e.g. 2:1.4.2-3")):
    """Split a version string into epoch, upstream version and revision."""
    parts = parse_version(value)
    typer.echo(f"epoch: {parts.epoch}")
    typer.echo(f"version: {parts.version}")
    typer.echo(f"revision: {parts.revision if parts.revision is not None else '-'}")


def main() -> None:
    """Main entry point for the pkgreader CLI."""
    cli()


if __name__ == "__main__":
    main()
