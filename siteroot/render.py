"""Project listing rendering for siteroot.

Renders the projects page from a Jinja2 template stored in the site root.

Key function:
- render_projects: Render a ProjectCollection with a template.
"""

from __future__ import annotations

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .projects import ProjectCollection
from .site import Site

__all__ = ["render_projects"]


def _environment(site: Site) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(site.root)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
    )


def render_projects(
    site: Site,
    projects: ProjectCollection,
    template_name: str = "projects.html.jinja",
) -> str:
    """Render the project listing.

    The template sees ``projects`` (the collection, iterable of dicts with
    their original keys), ``sources`` (file names in the same order) and
    ``site``.

    Raises:
        jinja2.TemplateNotFound: If the template is missing from the site root.
    """
    template = _environment(site).get_template(template_name)
    return template.render(
        projects=projects,
        sources=[path.name for path in projects.sources],
        site=site,
    )
