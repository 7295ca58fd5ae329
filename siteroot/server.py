"""HTTP server for siteroot.

Serves a site's content root and its project listing:
- Routes requests by Host header; unknown hosts get a 404.
- Rejects directory listings and missing paths with a 404 (serving 404.html when present).
- Never serves Jinja templates as raw files.
- Renders the project listing at /projects/ and dumps it at /projects.json,
  reading the project files afresh on every request.

Key classes:
- SiteServer: Owns the listening socket for one site.
- _SiteHandler: HTTP request handler doing the routing above.
"""

from __future__ import annotations

import io
import json
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from jinja2 import TemplateError

from .config import DEFAULT_CONFIG, projects_path
from .config import http_port as configured_port
from .dispatch import SiteDispatcher
from .projects import DecodeError, DirectoryNotFoundError, load_projects
from .render import render_projects
from .site import Site

PROJECTS_PAGE_ROUTES = ("/projects", "/projects/")
PROJECTS_JSON_ROUTE = "/projects.json"


class _SiteHandler(SimpleHTTPRequestHandler):
    """HTTP request handler bound to a dispatcher.

    Attributes:
        dispatcher: Resolves the Host header to a Site.
        config: Site configuration (projects_dir, projects_template).
    """

    dispatcher: SiteDispatcher = SiteDispatcher(())
    config: dict[str, Any] = DEFAULT_CONFIG

    def end_headers(self):
        self.send_header("Cache-Control", "no-cache")
        super().end_headers()

    def list_directory(self, path):  # pragma: no cover - exercised via send_head
        # Never expose directory listings; treat as missing content.
        return self._serve_404()

    def send_head(self):
        site = self.dispatcher.site_for(self.headers.get("Host"))
        if site is None:
            self.send_error(404, "Unknown host")
            return None
        self.directory = str(site.root)

        route = urlsplit(self.path).path
        if route in PROJECTS_PAGE_ROUTES:
            return self._serve_projects(site, as_json=False)
        if route == PROJECTS_JSON_ROUTE:
            return self._serve_projects(site, as_json=True)

        path_obj = Path(self.translate_path(self.path))
        if path_obj.suffix == ".jinja":
            return self._serve_404()
        if path_obj.is_dir():
            if not (path_obj / "index.html").exists():
                return self._serve_404()
        elif not path_obj.exists():
            return self._serve_404()
        return super().send_head()

    def _serve_projects(self, site: Site, as_json: bool):
        try:
            projects = load_projects(projects_path(site, self.config))
        except DecodeError as exc:
            self.send_error(
                500, "Project listing failed", f"{exc.source_path.name}: {exc.message}"
            )
            return None
        except DirectoryNotFoundError as exc:
            self.send_error(500, "Project listing failed", str(exc))
            return None

        if as_json:
            body = json.dumps(list(projects), indent=2, ensure_ascii=False)
            content_type = "application/json; charset=utf-8"
        else:
            template = self.config.get("projects_template") or "projects.html.jinja"
            if not Path(self.directory, template).exists():
                return self._serve_404()
            try:
                body = render_projects(site, projects, template)
            except TemplateError as exc:
                self.send_error(500, "Project listing failed", f"{template}: {exc}")
                return None
            content_type = "text/html; charset=utf-8"
        return self._send_body(200, content_type, body)

    def _serve_404(self):
        """Serve 404.html (when present) with a 404 status."""
        error_page = Path(self.directory) / "404.html"
        if error_page.exists():
            content = error_page.read_text(encoding="utf-8")
            return self._send_body(404, "text/html; charset=utf-8", content)
        self.send_error(404, "File not found")
        return None

    def _send_body(self, status: int, content_type: str, body: str):
        encoded = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-type", content_type)
        self.send_header("Content-Length", str(len(encoded)))
        self.end_headers()
        return io.BytesIO(encoded)


class SiteServer:
    """HTTP server for a single site.

    Attributes:
        site: Site being served.
        config: Site configuration.
        http_port: Port for the HTTP server.
        bind: Address to bind to ("" for all interfaces).
        dispatcher: Host router handed to the request handler.
    """

    def __init__(
        self,
        site: Site,
        config: dict[str, Any] | None = None,
        http_port: int | None = None,
    ):
        """Initialize the server.

        Args:
            site: Site to serve.
            config: Settings as returned by load_config.
            http_port: Optional override for the configured port.
        """
        self.site = site
        self.config = config if config is not None else DEFAULT_CONFIG.copy()
        self.http_port = (
            int(http_port) if http_port is not None else configured_port(self.config)
        )
        self.bind = str(self.config.get("bind") or "")
        self.dispatcher = SiteDispatcher([site])
        self._httpd: ThreadingHTTPServer | None = None

    def make_server(self) -> ThreadingHTTPServer:
        handler_cls = type(
            "_SiteHandlerForSite",
            (_SiteHandler,),
            {"dispatcher": self.dispatcher, "config": self.config},
        )
        return ThreadingHTTPServer((self.bind, self.http_port), handler_cls)

    def start(self) -> None:  # pragma: no cover - integration path
        self._httpd = self.make_server()
        hosts = ", ".join(sorted(self.site.host_names))
        print(f"Serving {self.site.root} at http://localhost:{self.http_port} (hosts: {hosts})")
        try:
            self._httpd.serve_forever()
        except KeyboardInterrupt:
            self.stop()

    def stop(self) -> None:
        if self._httpd is not None:
            self._httpd.server_close()
            self._httpd = None
