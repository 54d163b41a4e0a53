from __future__ import annotations

from pathlib import Path

from relkit.core.config import Config, ManifestConfig
from relkit.core.project import Project
from relkit.core.result import Err, Ok
from relkit.release.errors import InputError, ManifestError
from relkit.services.version import VersionChange, VersionService

MANIFEST = '[package]\nname = "x"\nversion = "1.4.9"\n\n[dependencies.y]\nversion = "1.4.9"\n'


def _service(tmp_path: Path, text: str = MANIFEST) -> VersionService:
    (tmp_path / "Cargo.toml").write_text(text, encoding="utf-8")
    return VersionService(project=Project(root=tmp_path), config=Config())


def test_show(tmp_path: Path) -> None:
    assert _service(tmp_path).show() == Ok("1.4.9")


def test_set_exact_version(tmp_path: Path) -> None:
    service = _service(tmp_path)

    result = service.set("2.0.0-rc.1")

    assert result == Ok(VersionChange(previous="1.4.9", current="2.0.0-rc.1"))
    assert (tmp_path / "Cargo.toml").read_text(encoding="utf-8") == MANIFEST.replace(
        'version = "1.4.9"\n\n', 'version = "2.0.0-rc.1"\n\n', 1
    )


def test_set_same_version_is_unchanged(tmp_path: Path) -> None:
    result = _service(tmp_path).set("1.4.9")

    assert isinstance(result, Ok)
    assert not result.value.changed


def test_set_rejects_malformed_version_without_touching_manifest(tmp_path: Path) -> None:
    service = _service(tmp_path)

    result = service.set("1.5")

    assert isinstance(result, Err)
    assert isinstance(result.error, InputError)
    assert (tmp_path / "Cargo.toml").read_text(encoding="utf-8") == MANIFEST


def test_bump_minor(tmp_path: Path) -> None:
    service = _service(tmp_path)

    result = service.bump("minor")

    assert result == Ok(VersionChange(previous="1.4.9", current="1.5.0"))
    assert service.show() == Ok("1.5.0")
    assert 'version = "1.4.9"' in (tmp_path / "Cargo.toml").read_text(encoding="utf-8")


def test_bump_drops_prerelease(tmp_path: Path) -> None:
    service = _service(tmp_path, '[package]\nversion = "2.0.0-rc.1"\n')

    assert service.bump("patch") == Ok(VersionChange(previous="2.0.0-rc.1", current="2.0.1"))


def test_bump_invalid_kind(tmp_path: Path) -> None:
    result = _service(tmp_path).bump("huge")

    assert isinstance(result, Err)
    assert isinstance(result.error, InputError)


def test_bump_non_semver_manifest_version(tmp_path: Path) -> None:
    result = _service(tmp_path, '[package]\nversion = "1.0"\n').bump("patch")

    assert isinstance(result, Err)
    assert isinstance(result.error, InputError)
    assert result.error.value == "1.0"


def test_custom_manifest_path(tmp_path: Path) -> None:
    crate = tmp_path / "crates" / "app"
    crate.mkdir(parents=True)
    (crate / "Cargo.toml").write_text('[package]\nversion = "0.1.0"\n', encoding="utf-8")
    config = Config(manifest=ManifestConfig(path="crates/app/Cargo.toml"))

    service = VersionService(project=Project(root=tmp_path), config=config)

    assert service.show() == Ok("0.1.0")


def test_missing_manifest(tmp_path: Path) -> None:
    service = VersionService(project=Project(root=tmp_path), config=Config())

    result = service.bump("patch")

    assert isinstance(result, Err)
    assert isinstance(result.error, ManifestError)
    assert result.error.kind == "io_failure"
