"""siteroot personal website.

This package serves one personal website: a Site descriptor names the host
names it answers to and the directory its content lives in, and the
projects module reads the project showcase from a directory of JSON files.

The main entry point is the CLI module, which provides commands for
serving the site, validating its content, and adding projects.

Modules:
- site: Site descriptor plus host matching and content resolution.
- projects: Loads project records from JSON files.
- config: Reads site.yaml and builds the Site.
- render / server / dispatch: Project listing page and HTTP serving.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
