"""Export command - serialize one resource record tree to an EAD 2002 file.

Thin adapter between Click and :class:`ExportResourceUseCase`:
1. parse CLI arguments and merge them over the loaded configuration
2. build the :class:`ExportRequest`
3. run the use case
4. present the response
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import cast

import click
from rich.console import Console

from ...application.models import ExportRequest
from ...config import ConfigLoader
from ...infrastructure.container import DependencyContainer
from ...infrastructure.io.exceptions import RecordLoadError
from ..presenters.summary import SummaryPresenter, SummaryRequest

console = Console()


@dataclass(frozen=True)
class ExportCommandOptions:
    output_path: Path | None
    config_file: Path | None
    include_unpublished: bool | None
    include_daos: bool | None
    use_numbered_c_tags: bool | None
    emit_component_ids: bool | None
    chunk_size: int | None
    strict: bool
    verbose: int

    @classmethod
    def from_kwargs(cls, options: dict[str, object]) -> ExportCommandOptions:
        return cls(
            output_path=cast("Path | None", options.get("output_path")),
            config_file=cast("Path | None", options.get("config_file")),
            include_unpublished=cast("bool | None", options.get("include_unpublished")),
            include_daos=cast("bool | None", options.get("include_daos")),
            use_numbered_c_tags=cast("bool | None", options.get("use_numbered_c_tags")),
            emit_component_ids=cast("bool | None", options.get("emit_component_ids")),
            chunk_size=cast("int | None", options.get("chunk_size")),
            strict=cast("bool", options.get("strict", False)),
            verbose=cast("int", options.get("verbose", 0)),
        )


@click.command()
@click.argument("record_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output EAD file (default: <record_file stem>_ead.xml)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to an ead_exporter.toml config file (default: ./ead_exporter.toml)",
)
@click.option(
    "--include-unpublished/--exclude-unpublished",
    "include_unpublished",
    default=None,
    help="Render unpublished records with audience=\"internal\"",
)
@click.option(
    "--daos/--no-daos",
    "include_daos",
    default=None,
    help="Render component digital objects as <dao>/<daogrp>",
)
@click.option(
    "--numbered-c/--flat-c",
    "use_numbered_c_tags",
    default=None,
    help="Use <c01>..<c12> instead of <c> for components",
)
@click.option(
    "--component-ids/--no-component-ids",
    "emit_component_ids",
    default=None,
    help="Write prefixed ref ids as component id attributes",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=None,
    help="Minimum size in characters of each streamed chunk",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with an error when any record was replaced by an error block",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def export_command(record_file: Path, **options: object) -> None:
    """Export a resource record tree as an EAD 2002 finding aid.

    RECORD_FILE is a JSON export of one resource with its nested
    components under "children".

    Examples:

    \b
        # Write collection_ead.xml next to the input
        ead-exporter export collection.json

    \b
        # Include unpublished records and digital objects
        ead-exporter export collection.json --include-unpublished --daos

    \b
        # Numbered components, custom output path
        ead-exporter export collection.json --numbered-c -o out/finding_aid.xml
    """
    command_options = ExportCommandOptions.from_kwargs(dict(options))

    runtime_config = ConfigLoader.load(config_file=command_options.config_file)
    try:
        runtime_config = runtime_config.with_overrides(
            include_unpublished=command_options.include_unpublished,
            include_daos=command_options.include_daos,
            use_numbered_c_tags=command_options.use_numbered_c_tags,
            emit_component_ids=command_options.emit_component_ids,
            chunk_size=command_options.chunk_size,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    request = ExportRequest(
        record_path=record_file,
        output_path=command_options.output_path,
        verbose=command_options.verbose,
    )

    container = DependencyContainer(
        config=runtime_config, verbose=command_options.verbose, console=console
    )
    try:
        use_case = container.create_export_use_case()
    except RecordLoadError as exc:
        raise click.ClickException(str(exc)) from exc

    response = use_case.execute(request)

    presenter = SummaryPresenter(console)
    presenter.present(SummaryRequest(response=response, record_file=record_file.name))
    container.create_logger().log_final_stats()

    if not response.success:
        raise click.ClickException(response.error or "Export failed")
    if command_options.strict and response.stats.failure_count:
        raise click.ClickException(
            f"Export completed with {response.stats.failure_count} contained failure(s)"
        )
