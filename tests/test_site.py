import dataclasses
import os
from pathlib import Path

import pytest

from siteroot.site import (
    DEFAULT_ROOT,
    ConfigurationError,
    Site,
    matches_host,
    resolve_content,
)


def test_matches_host_is_exact_membership(tmp_path):
    hosts = {"example.com", "lisp.example.com", "localhost"}
    site = Site(hosts, tmp_path)

    for host in hosts:
        assert matches_host(site, host)
    for host in ["Example.com", "www.example.com", "example.com.", "", "com", "localhost:4000"]:
        assert not matches_host(site, host)


def test_host_names_are_frozen(tmp_path):
    site = Site(["a.test", "b.test", "a.test"], tmp_path)
    assert site.host_names == frozenset({"a.test", "b.test"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        site.root = Path("/elsewhere")


def test_empty_host_set_rejected(tmp_path):
    with pytest.raises(ConfigurationError) as excinfo:
        Site([], tmp_path)
    assert "host" in excinfo.value.message


def test_missing_root_rejected(tmp_path):
    with pytest.raises(ConfigurationError) as excinfo:
        Site(["example.com"], tmp_path / "missing")
    assert "does not exist" in str(excinfo.value)


def test_file_root_rejected(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(ConfigurationError) as excinfo:
        Site(["example.com"], target)
    assert "not a directory" in str(excinfo.value)


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="permission bits are not enforced for root",
)
def test_unreadable_root_rejected(tmp_path):
    locked = tmp_path / "locked"
    locked.mkdir()
    locked.chmod(0)
    try:
        with pytest.raises(ConfigurationError):
            Site(["example.com"], locked)
    finally:
        locked.chmod(0o755)


def test_root_is_resolved_once(monkeypatch, tmp_path):
    (tmp_path / "www").mkdir()
    monkeypatch.chdir(tmp_path)
    site = Site(["example.com"], "www")
    assert site.root.is_absolute()
    assert site.root == (tmp_path / "www").resolve()

    # Changing directory afterwards does not move the root.
    other = tmp_path / "other"
    other.mkdir()
    monkeypatch.chdir(other)
    assert site.root == (tmp_path / "www").resolve()


def test_sites_compare_by_value(tmp_path):
    assert Site(["a.test"], tmp_path) == Site({"a.test"}, tmp_path)
    assert Site(["a.test"], tmp_path) != Site(["b.test"], tmp_path)
    assert len({Site(["a.test"], tmp_path), Site(["a.test"], tmp_path)}) == 1


def test_resolve_content_joins_without_checks(tmp_path):
    site = Site(["example.com"], tmp_path)
    assert resolve_content(site, "projects") == tmp_path.resolve() / "projects"
    assert resolve_content(site, Path("css/main.css")) == tmp_path.resolve() / "css" / "main.css"
    # Missing content is not an error here.
    assert not resolve_content(site, "nope.html").exists()


def test_default_root_is_packaged_content():
    site = Site(["localhost"])
    assert site.root == DEFAULT_ROOT.resolve()
    assert (site.root / "projects").is_dir()
    assert (site.root / "index.html").exists()


def test_single_host_string_is_one_host(tmp_path):
    site = Site("example.com", tmp_path)
    assert site.host_names == frozenset({"example.com"})
    assert matches_host(site, "example.com")
    assert not matches_host(site, "e")
