"""Typer CLI entry point for npmrc-shim.

This module only parses arguments and wires collaborators together;
the rewrite logic lives in npmrc_shim.npmrc.
"""

import logging
import subprocess
from pathlib import Path

import typer

from npmrc_shim.auth.artifactory import ArtifactoryAuth
from npmrc_shim.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    _error,
    _info,
    _setup_logging,
    _success,
    _validate_project_path,
    _warning,
    console,
)
from npmrc_shim.core.config import Config, load_config_with_project
from npmrc_shim.core.exceptions import ConfigError, NpmrcShimError, ProcessError
from npmrc_shim.npm.client import NpmClient
from npmrc_shim.npmrc.backup import RestoreOutcome, restore_from_disk
from npmrc_shim.npmrc.keys import RecognizedKeys
from npmrc_shim.npmrc.orchestrator import NpmrcOverride, npmrc_override
from npmrc_shim.npmrc.source import NpmRegistrySource
from npmrc_shim.npmrc.types import TypeRestriction

logger = logging.getLogger(__name__)


app = typer.Typer(
    name="npmrc-shim",
    help="Point npm at an authenticated Artifactory registry through a project .npmrc",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    """Point npm at an authenticated Artifactory registry through a project .npmrc."""
    if verbose and quiet:
        _warning("Both --verbose and --quiet specified, --verbose takes precedence")
    _setup_logging(verbose, quiet)


def _load_config(project_path: Path) -> Config:
    """Load configuration, exiting with EXIT_CONFIG_ERROR on failure."""
    try:
        return load_config_with_project(project_path)
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from e


def _build_source(config: Config, repo: str | None, npm_args: list[str]) -> NpmRegistrySource:
    """Create the npm/Artifactory source and check the npm version."""
    npm = NpmClient(config.npm.executable, [*config.npm.args, *npm_args])
    npm.ensure_supported_version(config.npm.min_version)
    return NpmRegistrySource(
        npm,
        ArtifactoryAuth(config.artifactory, repo),
        RecognizedKeys.from_config(config.npmrc),
    )


def _describe(restriction: TypeRestriction) -> str:
    if restriction is TypeRestriction.UNSET:
        return "no restriction"
    return restriction.value


@app.command()
def rewrite(
    project: str = typer.Option(".", "--project", "-p", help="Project directory"),
    repo: str | None = typer.Option(
        None, "--repo", "-r", help="npm repository (overrides artifactory.repo)"
    ),
    npm_args: list[str] = typer.Option(
        [], "--npm-arg", help="Extra argument for npm config queries (repeatable)"
    ),
) -> None:
    """Rewrite the project .npmrc. Run `restore` afterwards."""
    project_path = _validate_project_path(project)
    config = _load_config(project_path)

    override = NpmrcOverride(
        project_path,
        file_name=config.npmrc.file_name,
        backup_name=config.npmrc.backup_name,
    )
    try:
        restriction = override.rewrite_config(_build_source(config, repo, npm_args))
    except NpmrcShimError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from e

    _success(f"Rewrote {override.npmrc_path}")
    console.print(f"Type restriction: [bold]{_describe(restriction)}[/bold]")


@app.command()
def restore(
    project: str = typer.Option(".", "--project", "-p", help="Project directory"),
) -> None:
    """Restore the project .npmrc saved by `rewrite`."""
    project_path = _validate_project_path(project)
    config = _load_config(project_path)

    npmrc_path = project_path / config.npmrc.file_name
    backup_path = project_path / config.npmrc.backup_name
    try:
        outcome = restore_from_disk(npmrc_path, backup_path)
    except NpmrcShimError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from e

    if outcome is RestoreOutcome.RESTORED:
        _success(f"Restored {npmrc_path}")
    elif outcome is RestoreOutcome.REMOVED_OVERRIDE:
        _success(f"Removed override {npmrc_path}, no original existed")
    else:
        _info(f"No backup found, left {npmrc_path} untouched")


@app.command(
    "exec",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def exec_command(
    ctx: typer.Context,
    project: str = typer.Option(".", "--project", "-p", help="Project directory"),
    repo: str | None = typer.Option(
        None, "--repo", "-r", help="npm repository (overrides artifactory.repo)"
    ),
    npm_args: list[str] = typer.Option(
        [], "--npm-arg", help="Extra argument for npm config queries (repeatable)"
    ),
) -> None:
    """Run a command with the rewritten .npmrc, restoring it afterwards.

    Examples:
        npmrc-shim exec -- npm install
        npmrc-shim exec -r npm-virtual -- npm ci --ignore-scripts
        npmrc-shim exec --npm-arg=--location=project -- npm install

    """
    command = list(ctx.args)
    if not command:
        _error("No command given. Usage: npmrc-shim exec -- <command...>")
        raise typer.Exit(code=EXIT_ERROR)

    project_path = _validate_project_path(project)
    config = _load_config(project_path)

    try:
        source = _build_source(config, repo, npm_args)
        with npmrc_override(
            project_path,
            source,
            file_name=config.npmrc.file_name,
            backup_name=config.npmrc.backup_name,
        ) as restriction:
            _info(f"Type restriction: {_describe(restriction)}")
            logger.debug("Running command: %s", " ".join(command))
            try:
                returncode = subprocess.run(command, cwd=project_path, check=False).returncode
            except OSError as e:
                raise ProcessError(f"Cannot run {command[0]}: {e}") from e
    except NpmrcShimError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from e

    if returncode != 0:
        raise typer.Exit(code=returncode)
