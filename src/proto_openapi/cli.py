"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from proto_openapi.configuration import (
    DEFAULT_OPTIONS_FILENAME,
    ConfigurationError,
    build_options,
    read_options_mapping,
    split_plugin_parameter,
    write_options_scaffold,
)
from proto_openapi.document_writing import write_documents
from proto_openapi.generation_run import (
    GenerationError,
    GenerationRequest,
    generate,
    load_descriptor_set,
    select_files_to_generate,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="proto-openapi-gen")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log progress to stderr.")
def cli(verbose: bool) -> None:
    """Generate OpenAPI v3 documents from annotated protobuf descriptors."""
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_OPTIONS_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML options file to write",
)
def generate_config(output_path: str) -> None:
    """Write an options file listing every generation option with its default."""
    try:
        resolved_output = write_options_scaffold(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--descriptor-set",
    "descriptor_set_path",
    required=True,
    type=click.Path(path_type=str),
    help="Binary FileDescriptorSet from protoc --include_imports --descriptor_set_out",
)
@click.option(
    "--file",
    "files",
    multiple=True,
    help="Proto file to render (repeatable); defaults to every file declaring a service",
)
@click.option(
    "--options",
    "options_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML options file",
)
@click.option(
    "--option",
    "option_pairs",
    multiple=True,
    help="Option override written as key=value (repeatable)",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    default=".",
    show_default=True,
    type=click.Path(path_type=str),
    help="Directory for the generated documents",
)
def generate_documents(
    descriptor_set_path: str,
    files: tuple[str, ...],
    options_path: str | None,
    option_pairs: tuple[str, ...],
    output_dir: str,
) -> None:
    """Render OpenAPI documents for the services in a descriptor set."""
    try:
        raw_options = read_options_mapping(options_path) if options_path else {}
        for pair in option_pairs:
            raw_options.update(split_plugin_parameter(pair))
        options = build_options(raw_options)
        file_protos = load_descriptor_set(descriptor_set_path)
        result = generate(
            GenerationRequest(
                file_protos=file_protos,
                files_to_generate=select_files_to_generate(file_protos, files),
                options=options,
            )
        )
        written = write_documents(result.documents, output_dir)
    except (ConfigurationError, GenerationError, OSError) as exc:
        raise CliError(str(exc)) from exc

    for diagnostic in result.diagnostics:
        click.echo(str(diagnostic), err=True)
    for path in written:
        click.echo(str(path))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
