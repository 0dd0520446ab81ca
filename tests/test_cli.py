"""Tests for methodguard.cli — argument parsing, app resolution, and ``routes``."""

import sys
import types

import pytest

from methodguard.app import App
from methodguard.cli import main
from methodguard.cli._routes import load_app
from methodguard.plugin import MethodGuard


def _guarded_app() -> App:
    app = App()

    @app.route("/users", methods=["GET", "POST"], name="users")
    def list_users():
        return []

    app.register(MethodGuard(), {"methodsToSupport": ["get", "post", "delete"]})
    return app


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with methodguard apps on sys.modules."""
    mod = types.ModuleType("_fake_guard_app")
    mod.app = _guarded_app()  # type: ignore[attr-defined]
    mod.create_app = _guarded_app  # type: ignore[attr-defined]
    mod.empty = App()  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_guard_app", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_routes_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "methodguard" in capsys.readouterr().out


@pytest.mark.usefixtures("_fake_app_module")
class TestLoadApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(load_app("_fake_guard_app:app"), App)

    def test_default_attribute(self) -> None:
        assert isinstance(load_app("_fake_guard_app"), App)

    def test_factory(self) -> None:
        assert isinstance(load_app("_fake_guard_app:create_app"), App)

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            load_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            load_app("_fake_guard_app:does_not_exist")

    def test_not_an_app(self) -> None:
        with pytest.raises(TypeError, match="not a methodguard.App"):
            load_app("_fake_guard_app:not_an_app")


@pytest.mark.usefixtures("_fake_app_module")
class TestRoutesCommand:
    def test_lists_synthetic_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_guard_app:app"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        assert "list_users (users)" in lines[2]
        assert lines[2].startswith("GET, POST")
        assert lines[3].split() == ["DELETE", "/users", "405", "(methodNotAllowed)"]

    def test_hide_synthetic(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_guard_app:create_app", "--hide-synthetic"])
        out = capsys.readouterr().out
        assert "list_users" in out
        assert "methodNotAllowed" not in out

    def test_empty_app(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_guard_app:empty"])
        assert "No routes registered." in capsys.readouterr().out

    def test_bad_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_guard_app:not_an_app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
