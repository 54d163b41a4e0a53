from __future__ import annotations

from pathlib import Path

import pytest

from relkit.core.config import BuildConfig, Config
from relkit.core.project import Project
from relkit.core.result import Err, Ok, Result
from relkit.output.console import MockConsole
from relkit.platform.process import ProcessError
from relkit.release.build_counter import BuildCounter, MemoryCounterStore
from relkit.services.build import BuildService


def _service(
    tmp_path: Path,
    *,
    store: MemoryCounterStore | None = None,
    environ: dict[str, str] | None = None,
    console: MockConsole | None = None,
) -> BuildService:
    (tmp_path / "Cargo.toml").write_text('[package]\nversion = "0.2.0"\n', encoding="utf-8")
    return BuildService(
        project=Project(root=tmp_path),
        config=Config(),
        console=console or MockConsole(),
        counter=BuildCounter(store) if store is not None else None,
        environ=environ if environ is not None else {},
    )


def _patch_run_live(
    monkeypatch: pytest.MonkeyPatch,
    result: Result[None, ProcessError] | None = None,
) -> dict[str, object]:
    import relkit.services.build as build_mod

    seen: dict[str, object] = {}

    def fake_run_live(
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> Result[None, ProcessError]:
        seen["cmd"] = cmd
        seen["cwd"] = cwd
        seen["env"] = env
        return result if result is not None else Ok(None)

    monkeypatch.setattr(build_mod, "run_live", fake_run_live)
    return seen


def test_next_build_number_uses_state_file(tmp_path: Path) -> None:
    service = _service(tmp_path)
    state = tmp_path / "build" / "build-number"
    state.parent.mkdir()
    state.write_text("41\n", encoding="utf-8")

    assert service.next_build_number() == Ok(42)
    assert state.read_text(encoding="utf-8") == "42\n"


def test_next_build_number_reports_write_failure(tmp_path: Path) -> None:
    (tmp_path / "build").write_text("blocks the directory", encoding="utf-8")
    service = _service(tmp_path)

    result = service.next_build_number()

    assert isinstance(result, Err)
    assert result.error.kind == "state_io"


def test_build_exports_number_and_banner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = _patch_run_live(monkeypatch)
    store = MemoryCounterStore("6")
    console = MockConsole()
    service = _service(tmp_path, store=store, environ={"PATH": "/usr/bin"}, console=console)

    result = service.build(["--release"])

    assert result == Ok(7)
    assert seen["cmd"] == ["cargo", "build", "--release"]
    assert seen["cwd"] == tmp_path
    assert seen["env"] == {
        "PATH": "/usr/bin",
        "BUILD_NUMBER": "7",
        "PKG_VERSION_WITH_BUILD": "0.2.0 (build 7)",
    }
    assert store.text == "7\n"
    assert console.find("BUILD_NUMBER=7")


def test_build_prefers_external_number(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = _patch_run_live(monkeypatch)
    store = MemoryCounterStore("6")
    service = _service(tmp_path, store=store, environ={"BUILD_NUMBER": "9001"})

    assert service.build() == Ok(9001)
    env = seen["env"]
    assert isinstance(env, dict)
    assert env["BUILD_NUMBER"] == "9001"
    assert store.saves == 0


def test_build_option_beats_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_run_live(monkeypatch)
    store = MemoryCounterStore()
    service = _service(tmp_path, store=store, environ={"BUILD_NUMBER": "9001"})

    assert service.build(build_number=3) == Ok(3)
    assert store.saves == 0


def test_build_compile_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_run_live(
        monkeypatch,
        Err(ProcessError(command=("cargo", "build"), returncode=101, stdout="", stderr="")),
    )
    service = _service(tmp_path, store=MemoryCounterStore())

    result = service.build()

    assert isinstance(result, Err)
    assert result.error.kind == "compile_failed"
    assert result.error.returncode == 101


def test_build_missing_compiler(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_run_live(
        monkeypatch,
        Err(ProcessError(command=("cargo",), returncode=-1, stdout="", stderr="No such file")),
    )
    service = _service(tmp_path, store=MemoryCounterStore())

    result = service.build()

    assert isinstance(result, Err)
    assert "could not start cargo" in result.error.message


def test_build_dry_run_does_not_execute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = _patch_run_live(monkeypatch)
    console = MockConsole()
    service = _service(tmp_path, store=MemoryCounterStore(), console=console)

    assert service.build(dry_run=True) == Ok(1)
    assert seen == {}
    assert console.find("would run: cargo build")


def test_build_without_manifest_uses_fallback_version(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    seen = _patch_run_live(monkeypatch)
    console = MockConsole()
    service = BuildService(
        project=Project(root=tmp_path),
        config=Config(build=BuildConfig(command=("make",))),
        console=console,
        counter=BuildCounter(MemoryCounterStore()),
        environ={},
    )

    assert service.build() == Ok(1)
    env = seen["env"]
    assert isinstance(env, dict)
    assert env["PKG_VERSION_WITH_BUILD"] == "0.0.0 (build 1)"
    assert seen["cmd"] == ["make"]
    assert any(o.message.startswith("warning:") for o in console.outputs)
