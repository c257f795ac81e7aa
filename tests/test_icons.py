import pytest

pytest.importorskip("PySide6")

from PySide6.QtCore import Qt, QThreadPool  # noqa: E402
from PySide6.QtGui import QColor, QImage  # noqa: E402

from hermes.app_catalog import AppCatalog  # noqa: E402
from hermes.icons import IconProvider  # noqa: E402
from hermes.models import AppInfo  # noqa: E402


def _write_png(path) -> None:
    image = QImage(4, 4, QImage.Format_ARGB32)
    image.fill(QColor(Qt.red))
    assert image.save(str(path), "PNG")


def _bundle(tmp_path, name, with_icon=True) -> AppInfo:
    app_dir = tmp_path / "Applications" / f"{name}.app"
    resources = app_dir / "Contents" / "Resources"
    resources.mkdir(parents=True)
    if with_icon:
        (resources / "AppIcon.icns").write_bytes(b"icns")
    return AppInfo(name, str(app_dir))


def _sips_writes_png(args) -> str:
    _write_png(args[args.index("--out") + 1])
    return ""


def _sips_calls(executor):
    return [c for c in executor.calls if c[0] == "sips"]


@pytest.fixture()
def provider(qapp, executor, settings) -> IconProvider:
    return IconProvider(AppCatalog(executor, settings))


def _drain(qapp) -> None:
    QThreadPool.globalInstance().waitForDone()
    qapp.processEvents()


def test_cached_png_is_used_without_extraction(qapp, provider, executor, tmp_path) -> None:
    app = _bundle(tmp_path, "Maps")
    icon_dir = tmp_path / "icons"
    icon_dir.mkdir()
    _write_png(icon_dir / "Maps.png")

    icon = provider.icon_for(app)

    assert not icon.isNull()
    _drain(qapp)
    assert executor.calls == []


def test_missing_icon_falls_back_then_announces_extracted_one(qapp, provider, executor, tmp_path) -> None:
    app = _bundle(tmp_path, "Notes")
    executor.outputs["sips"] = _sips_writes_png
    ready = []
    provider.icon_ready.connect(lambda name, icon: ready.append((name, icon.isNull())))

    fallback = provider.icon_for(app)
    assert fallback is not None
    _drain(qapp)

    assert ready == [("Notes", False)]
    assert (tmp_path / "icons" / "Notes.png").exists()
    assert len(_sips_calls(executor)) == 1


def test_extraction_in_flight_is_not_started_twice(qapp, provider, executor, tmp_path) -> None:
    app = _bundle(tmp_path, "Books")
    executor.outputs["sips"] = _sips_writes_png

    provider.icon_for(app)
    provider.icon_for(app)
    _drain(qapp)

    assert len(_sips_calls(executor)) == 1


def test_failed_extraction_is_tried_once(qapp, provider, executor, tmp_path) -> None:
    app = _bundle(tmp_path, "Broken")
    ready = []
    provider.icon_ready.connect(lambda name, icon: ready.append(name))

    provider.icon_for(app)
    _drain(qapp)
    provider.icon_for(app)
    provider.icon_for(app)
    _drain(qapp)

    assert ready == []
    assert len(_sips_calls(executor)) == 1
