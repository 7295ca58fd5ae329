"""Host-based request dispatch for siteroot.

Maps the Host header of an incoming request to the Site that serves it.
Port handling lives here rather than on the descriptor: a Site only knows
bare host names and matches them exactly.
"""

from __future__ import annotations

from collections.abc import Iterable

from .site import Site, matches_host


def strip_port(host_header: str) -> str:
    """Drop a trailing ``:port`` from a Host header value.

    Bracketed IPv6 literals keep their brackets, so ``[::1]:4000`` becomes
    ``[::1]``.

    Examples:
        >>> strip_port("example.com:8080")
        'example.com'

        >>> strip_port("example.com")
        'example.com'
    """
    host = host_header.strip()
    if host.startswith("["):
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    name, sep, port = host.rpartition(":")
    if sep and port.isdigit():
        return name
    return host


class SiteDispatcher:
    """Routes host names to sites, first match wins.

    Attributes:
        sites: Sites in the order they are consulted.
    """

    def __init__(self, sites: Iterable[Site]):
        self.sites = tuple(sites)

    def site_for(self, host_header: str | None) -> Site | None:
        if not host_header:
            return None
        host = strip_port(host_header)
        for site in self.sites:
            if matches_host(site, host):
                return site
        return None
