"""Command-line interface for siteroot.

This module defines the CLI commands using Click framework.
Every command reads site.yaml from the current directory.

Commands:
- serve: Serve the site over HTTP.
- check: Validate the configuration and every project file.
- projects: List the loaded projects.
- project: Create a new project file interactively.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
import questionary

from . import __version__
from .config import http_port, load_config, projects_path, site_from_config
from .projects import (
    DecodeError,
    DirectoryNotFoundError,
    ProjectCollection,
    load_projects,
)
from .site import ConfigurationError, Site
from .utils import display_path, slugify


@click.group()
@click.version_option(version=__version__, prog_name="siteroot")
def cli():
    """siteroot personal website."""


@cli.command()
@click.option(
    "--port",
    type=int,
    required=False,
    help="Port to serve on (overrides site.yaml)",
)
def serve(port: int | None):
    """Serve the site over HTTP."""
    project_root = Path.cwd()
    site, config = _load_site(project_root)
    from .server import SiteServer

    server = SiteServer(site, config, http_port=port)
    server.start()


@cli.command()
def check():
    """Validate the configuration and every project file."""
    project_root = Path.cwd()
    site, config = _load_site(project_root)
    projects = _load_projects(site, config, project_root)
    click.echo(f"Hosts: {', '.join(sorted(site.host_names))}")
    click.echo(f"Root: {site.root}")
    click.echo(f"Projects: {len(projects)}")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print records as JSON")
def projects(as_json: bool):
    """List the loaded projects."""
    project_root = Path.cwd()
    site, config = _load_site(project_root)
    loaded = _load_projects(site, config, project_root)
    if as_json:
        click.echo(json.dumps(list(loaded), indent=2, ensure_ascii=False))
        return
    for path, record in loaded.with_sources():
        title = record.get("title") if isinstance(record, dict) else None
        click.echo(f"{path.name}: {title}" if title else path.name)


@cli.command()
def project():
    """Create a new project file interactively."""
    project_root = Path.cwd()
    site, config = _load_site(project_root)
    target_dir = projects_path(site, config)

    title = questionary.text(
        "Project title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()
    title = title.strip()

    description = questionary.text(
        "Short description (optional):", style=_questionary_style()
    ).ask()
    if description is None:
        raise click.Abort()

    url = questionary.text("Link (optional):", style=_questionary_style()).ask()
    if url is None:
        raise click.Abort()

    target_path = target_dir / f"{slugify(title)}.json"
    if target_path.exists():
        raise click.ClickException(
            f"File already exists: {display_path(target_path, project_root)}"
        )

    record: dict[str, Any] = {"title": title}
    if description.strip():
        record["description"] = description.strip()
    if url.strip():
        record["url"] = url.strip()

    target_dir.mkdir(parents=True, exist_ok=True)
    target_path.write_text(
        json.dumps(record, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    click.echo(f"Created {display_path(target_path, project_root)}")


def _load_site(project_root: Path) -> tuple[Site, dict[str, Any]]:
    """Load site.yaml and build the Site it describes."""
    try:
        config = load_config(project_root)
        site = site_from_config(config, project_root)
        http_port(config)
    except ConfigurationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc.message}") from None
    return site, config


def _load_projects(
    site: Site, config: dict[str, Any], project_root: Path
) -> ProjectCollection:
    """Load the site's projects, exiting with a readable report on failure."""
    try:
        return load_projects(projects_path(site, config))
    except DecodeError as exc:
        click.echo(click.style("Project listing failed:", fg="red", bold=True), err=True)
        click.echo(
            click.style(
                f"  File: {display_path(exc.source_path, project_root)}", fg="yellow"
            ),
            err=True,
        )
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    except DirectoryNotFoundError as exc:
        click.echo(click.style("Project listing failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Error: {exc}", fg="white"), err=True)
        raise SystemExit(1) from None


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
