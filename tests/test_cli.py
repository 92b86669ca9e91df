"""Tests for hellosite.cli: argument parsing, app loading and logging."""

import logging
from typing import Any

import pytest

from hellosite.app import App
from hellosite.cli import DEFAULT_APP, configure_logging, main, resolve_app
from hellosite.config import AppConfig

debug_app = App(AppConfig(static_dir=None, debug=True))
not_an_app = "just a string"


def make_app() -> App:
    return App(AppConfig(static_dir=None, port=5050))


@pytest.fixture(autouse=True)
def _restore_logger():
    logger = logging.getLogger("hellosite")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def servers(monkeypatch):
    calls: list[tuple[str, Any, str, int, dict[str, Any]]] = []
    monkeypatch.setattr(
        "hellosite.serve.run_production_server",
        lambda app, host, port, **kw: calls.append(("production", app, host, port, kw)),
    )
    monkeypatch.setattr(
        "hellosite.serve.run_dev_server",
        lambda app, host, port, **kw: calls.append(("dev", app, host, port, kw)),
    )
    return calls


class TestHelpAndArgs:
    @pytest.mark.parametrize("argv", [["--help"], ["run", "--help"], ["routes", "--help"]])
    def test_help_exits_zero(self, argv) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("argv", [["deploy"], ["run", "--port", "abc"]])
    def test_bad_args_exit_two(self, argv) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2

    def test_no_command_prints_usage(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: hellosite" in capsys.readouterr().out


class TestResolveApp:
    def test_app_instance(self) -> None:
        assert resolve_app("test_cli:debug_app") is debug_app

    def test_factory_is_called(self) -> None:
        assert resolve_app("test_cli:make_app").config.port == 5050

    def test_attribute_defaults_to_app(self) -> None:
        from hellosite import site

        assert resolve_app("hellosite.site") is site.app

    def test_not_an_app(self) -> None:
        with pytest.raises(TypeError, match="is a str, not a hellosite.App"):
            resolve_app("test_cli:not_an_app")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_bad_target_exits_one(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "hellosite.site:nope"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestRoutesCommand:
    def test_lists_site_routes(self, capsys) -> None:
        main(["routes"])
        out = capsys.readouterr().out

        assert out.splitlines()[0].split() == ["METHOD", "PATH", "HANDLER"]
        assert "/hello" in out
        assert "index" in out
        assert "Static files: / ->" in out

    def test_empty_app(self, capsys) -> None:
        main(["routes", "test_cli:make_app"])
        out = capsys.readouterr().out

        assert "No routes registered." in out
        assert "Static files" not in out


class TestRunCommand:
    def test_default_app_uses_production_server(self, servers) -> None:
        main(["run"])

        kind, app, host, port, kw = servers[0]
        assert kind == "production"
        assert app is resolve_app(DEFAULT_APP)
        assert (host, port) == ("127.0.0.1", 3000)
        assert kw == {"workers": 0, "log_level": "info"}

    def test_overrides(self, servers) -> None:
        main(["run", "test_cli:make_app", "--host", "0.0.0.0", "--port", "9000", "--workers", "3"])

        assert servers[0][2:] == ("0.0.0.0", 9000, {"workers": 3, "log_level": "info"})

    def test_debug_app_uses_dev_server(self, servers) -> None:
        main(["run", "test_cli:debug_app"])

        kind, _, _, _, kw = servers[0]
        assert kind == "dev"
        assert kw["app_path"] == "test_cli:debug_app"

    def test_production_flag_wins_over_debug(self, servers) -> None:
        main(["run", "test_cli:debug_app", "--production"])
        assert servers[0][0] == "production"

    def test_startup_line_is_printed(self, servers, capsys) -> None:
        main(["run", "test_cli:make_app"])
        assert "Server is running on http://127.0.0.1:5050" in capsys.readouterr().err


class TestConfigureLogging:
    def test_info_reaches_stderr(self, capsys) -> None:
        configure_logging("info")
        logging.getLogger("hellosite.app").info("Server is running on http://%s:%d", "h", 1)

        assert capsys.readouterr().err == "Server is running on http://h:1\n"

    def test_level_filters(self, capsys) -> None:
        configure_logging("warning")
        logging.getLogger("hellosite.static").info("quiet")

        assert capsys.readouterr().err == ""

    def test_idempotent(self) -> None:
        configure_logging()
        configure_logging("debug")

        logger = logging.getLogger("hellosite")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
