import json
from datetime import datetime, timezone

import pytest

from hermes.app_catalog import AppCatalog, parse_last_used, sanitize_app_name, sort_by_recency
from hermes.models import AppInfo


def _bundle(parent, name, with_icon=False):
    app = parent / f"{name}.app"
    resources = app / "Contents" / "Resources"
    resources.mkdir(parents=True)
    if with_icon:
        (resources / "AppIcon.icns").write_bytes(b"icns")
    return app


@pytest.fixture()
def catalog(executor, settings) -> AppCatalog:
    return AppCatalog(executor, settings)


def test_sanitize_app_name() -> None:
    assert sanitize_app_name("Visual Studio/Code") == "Visual_Studio_Code"


def test_scan_dedupes_by_priority_and_sorts(catalog, tmp_path) -> None:
    primary, system = tmp_path / "Applications", tmp_path / "System"
    _bundle(primary, "zed")
    _bundle(primary, "Mail")
    _bundle(system, "Mail")
    _bundle(system, "calendar")
    (system / "README.txt").write_text("", encoding="utf-8")

    apps = catalog.scan_apps()
    assert [a.name for a in apps] == ["calendar", "Mail", "zed"]
    mail = apps[1]
    assert mail.path == str(primary / "Mail.app")
    assert mail.icon == str(tmp_path / "icons" / "Mail.png")
    assert mail.last_used is None


def test_scan_with_no_directories(catalog) -> None:
    assert catalog.scan_apps() == []


def test_parse_last_used() -> None:
    expected = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc).timestamp()
    assert parse_last_used("kMDItemLastUsedDate = 2024-01-15 10:30:00 +0000\n") == expected
    assert parse_last_used("kMDItemLastUsedDate = (null)\n") is None
    assert parse_last_used("") is None
    assert parse_last_used("garbage") is None


def test_sort_by_recency() -> None:
    apps = [
        AppInfo("beta", "/b"),
        AppInfo("old", "/o", last_used=100.0),
        AppInfo("Alpha", "/a"),
        AppInfo("new", "/n", last_used=300.0),
    ]
    assert [a.name for a in sort_by_recency(apps)] == ["new", "old", "Alpha", "beta"]


def _mdls(stamps):
    def run(args):
        ts = stamps.get(args[-1])
        return f"kMDItemLastUsedDate = {ts} +0000" if ts else "kMDItemLastUsedDate = (null)"
    return run


def test_iter_apps_delivers_cache_first_then_ranked(catalog, executor, settings, tmp_path) -> None:
    cache = tmp_path / "cache" / "apps.json"
    cache.parent.mkdir(parents=True)
    cached = [AppInfo("Alpha", "/a"), AppInfo("Beta", "/b"), AppInfo("Gamma", "/g")]
    cache.write_text(json.dumps([a.to_dict() for a in cached]), encoding="utf-8")
    _bundle(tmp_path / "Applications", "Fresh")
    executor.outputs["mdls"] = _mdls({"/b": "2024-01-01 00:00:00", "/g": "2024-06-01 00:00:00"})

    deliveries = list(catalog.iter_apps())

    assert [final for _, final in deliveries] == [False, True]
    assert [a.name for a in deliveries[0][0]] == ["Alpha", "Beta", "Gamma"]
    ranked = deliveries[1][0]
    assert [a.name for a in ranked] == ["Gamma", "Beta", "Alpha"]
    assert ranked[0].last_used > ranked[1].last_used
    assert ranked[2].last_used is None

    saved = json.loads(cache.read_text(encoding="utf-8"))
    assert [d["name"] for d in saved] == ["Gamma", "Beta", "Alpha"]
    assert saved[0]["lastUsed"] == ranked[0].last_used


def test_iter_apps_without_cache_uses_scan(catalog, executor, tmp_path) -> None:
    _bundle(tmp_path / "Applications", "Notes")
    _bundle(tmp_path / "Applications", "Books")

    deliveries = list(catalog.iter_apps())

    assert [final for _, final in deliveries] == [False, True]
    assert [a.name for a in deliveries[0][0]] == ["Books", "Notes"]
    assert [a.name for a in deliveries[1][0]] == ["Books", "Notes"]
    assert (tmp_path / "cache" / "apps.json").exists()


def test_load_cache_unreadable(catalog, tmp_path) -> None:
    cache = tmp_path / "cache" / "apps.json"
    cache.parent.mkdir(parents=True)
    cache.write_text("oops", encoding="utf-8")
    assert catalog.load_cache() is None


def test_extract_icon_converts_and_is_idempotent(catalog, executor, tmp_path) -> None:
    app_dir = _bundle(tmp_path / "Applications", "Maps", with_icon=True)
    app = AppInfo("Maps", str(app_dir))

    def sips(args):
        out = args[args.index("--out") + 1]
        with open(out, "wb") as f:
            f.write(b"png")
        return ""

    executor.outputs["sips"] = sips
    target = catalog.extract_icon(app)
    assert target == tmp_path / "icons" / "Maps.png"
    assert target.exists()
    program, args = executor.calls[0]
    assert program == "sips"
    assert args[:6] == ["-s", "format", "png", "-z", "96", "96"]
    assert args[6].endswith("AppIcon.icns")

    assert catalog.extract_icon(app) == target
    assert len(executor.calls) == 1


def test_extract_icon_without_icns(catalog, executor, tmp_path) -> None:
    app_dir = _bundle(tmp_path / "Applications", "Bare")
    assert catalog.extract_icon(AppInfo("Bare", str(app_dir))) is None
    assert executor.calls == []


def test_extract_icon_when_converter_fails(catalog, tmp_path) -> None:
    app_dir = _bundle(tmp_path / "Applications", "Broken", with_icon=True)
    assert catalog.extract_icon(AppInfo("Broken", str(app_dir))) is None
