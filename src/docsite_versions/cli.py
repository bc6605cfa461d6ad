"""``docsite-versions`` command line: build and inspect the publish manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, NoReturn

import typer

from docsite_common.errors import DocsiteError
from docsite_common.logging import get_logger, setup_logging
from docsite_common.problem_details import render_problem
from docsite_versions.build import build_manifest, classify_release
from docsite_versions.current_version import current_label, derive_current_version
from docsite_versions.edit_links import edit_url
from docsite_versions.manifest import encode_manifest, manifest_schema, write_manifest
from docsite_versions.release_train import load_release_train
from docsite_versions.settings import load_site_settings

if TYPE_CHECKING:
    from docsite_versions.settings import SiteBuildSettings

__all__ = ["app"]

CLI_COMMAND = "docsite-versions"
LOGGER = get_logger(__name__)

app = typer.Typer(
    help="Resolve version labels, banners and indexing for the documentation site.",
    no_args_is_help=True,
    add_completion=False,
)


def _fail(error: DocsiteError, command: str) -> NoReturn:
    LOGGER.log(
        error.log_level,
        "Command failed",
        extra={"operation": command, "error_code": error.code.value},
    )
    problem = error.to_problem_details(instance=f"urn:cli:{CLI_COMMAND}:{command}")
    typer.echo(render_problem(problem), err=True)
    raise typer.Exit(code=1) from error


def _settings() -> SiteBuildSettings:
    settings = load_site_settings()
    setup_logging(settings.log_level)
    return settings


@app.command("manifest")
def manifest_command(
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the manifest here instead of stdout.",
            metavar="PATH",
        ),
    ] = None,
) -> None:
    """Build the publish manifest from the environment.

    Raises
    ------
    typer.Exit
        Raised with exit code 1 when the build fails.
    """
    try:
        settings = _settings()
        manifest = build_manifest(settings)
        if output is not None:
            write_manifest(manifest, output)
        else:
            typer.echo(encode_manifest(manifest).decode("utf-8"), nl=False)
    except DocsiteError as exc:
        _fail(exc, "manifest")


@app.command("classify")
def classify_command(
    version: Annotated[str, typer.Argument(help="Release identifier, e.g. 2.19.")],
) -> None:
    """Print ``prerelease`` or ``release`` for one published version."""
    try:
        settings = _settings()
        release = classify_release(
            version, settings.versioned_docs_root, settings.version_config_key
        )
    except DocsiteError as exc:
        _fail(exc, "classify")
    typer.echo("prerelease" if release.is_prerelease else "release")


@app.command("current")
def current_command() -> None:
    """Print the label of the in-development version."""
    try:
        settings = _settings()
        version = derive_current_version(load_release_train(settings.versions_file))
    except DocsiteError as exc:
        _fail(exc, "current")
    typer.echo(current_label(version))


@app.command("schema")
def schema_command() -> None:
    """Print the JSON Schema of the publish manifest."""
    typer.echo(json.dumps(manifest_schema(), indent=2, sort_keys=True))


@app.command("edit-url")
def edit_url_command(
    doc_path: Annotated[str, typer.Argument(help="Source path relative to the docs root.")],
) -> None:
    """Print the edit link for a page; prints nothing for generated reference pages."""
    try:
        settings = _settings()
    except DocsiteError as exc:
        _fail(exc, "edit-url")
    url = edit_url(doc_path, settings.edit_url_base)
    if url is not None:
        typer.echo(url)
