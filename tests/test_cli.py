"""Tests for wren.cli — CLI entrypoint and argument parsing."""

import sys
import types
from pathlib import Path

import pytest

from wren.cli import main
from wren.cli._resolve import config_from_args, resolve_runner
from wren.pages.types import QueryResult


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_watch_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["watch", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_routes_missing_path(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_watch_missing_path(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["watch"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "wren" in captured.out


class TestRoutesCommand:
    def test_prints_table(self, make_pages, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_pages({"index.js": "", "about.js": "", "blog/hello.py": ""})
        main(["routes", str(root)])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["ROUTE", "COMPONENT"]
        assert lines[2].split() == ["/", "index.js"]
        assert lines[3].split() == ["/about", "about.js"]
        assert lines[4].split() == ["/blog/hello", "blog/hello.py"]

    def test_ext_filter(self, make_pages, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_pages({"about.js": "", "contact.py": ""})
        main(["routes", str(root), "--ext", "py"])
        out = capsys.readouterr().out
        assert "/contact" in out
        assert "/about" not in out

    def test_ignore(self, make_pages, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_pages({"about.js": "", "drafts/wip.js": ""})
        main(["routes", str(root), "--ignore", "drafts/*"])
        assert "/drafts/wip" not in capsys.readouterr().out

    def test_empty_directory(self, make_pages, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_pages()
        main(["routes", str(root)])
        assert "No pages generated." in capsys.readouterr().out

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tmp_path / "missing")])
        assert exc_info.value.code == 1
        assert "does not exist" in capsys.readouterr().err

    def test_collections_listed(self, make_pages, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_pages({"blog/{Post.slug}.py": ""})
        main(["routes", str(root)])
        assert "allPost -> blog/{Post.slug}.py" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Runner resolution
# ---------------------------------------------------------------------------


class _Runner:
    async def run(self, query: str) -> QueryResult:
        return QueryResult(data={})


@pytest.fixture
def _fake_runner_module(monkeypatch: pytest.MonkeyPatch) -> None:
    module = types.ModuleType("fake_wren_runner")
    module.runner = _Runner()
    module.make_runner = lambda: _Runner()
    module.not_a_runner = 42
    monkeypatch.setitem(sys.modules, "fake_wren_runner", module)


@pytest.mark.usefixtures("_fake_runner_module")
class TestResolveRunner:
    def test_default_attribute(self) -> None:
        assert isinstance(resolve_runner("fake_wren_runner"), _Runner)

    def test_factory(self) -> None:
        assert isinstance(resolve_runner("fake_wren_runner:make_runner"), _Runner)

    def test_not_a_runner(self) -> None:
        with pytest.raises(TypeError, match="expected a query runner"):
            resolve_runner("fake_wren_runner:not_a_runner")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_runner("no_such_module_for_wren")


class TestConfigFromArgs:
    def test_extensions_normalized(self) -> None:
        args = types.SimpleNamespace(path="pages", ignore=[], ext=["py", ".js"])
        config = config_from_args(args)
        assert config.extensions == (".py", ".js")

    def test_defaults(self) -> None:
        args = types.SimpleNamespace(path="pages", ignore=["x/*"], ext=[])
        config = config_from_args(args)
        assert config.ignore == ("x/*",)
        assert ".py" in config.extensions
