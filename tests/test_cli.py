"""Tests for mirage.cli — argument parsing and the listing/resolve commands."""

import pytest

from mirage.cli import main
from mirage.cli._load import load_registry
from mirage.registry import VirtualPageRegistry


class TestCLIHelp:
    @pytest.mark.parametrize("argv", [["--help"], ["pages", "--help"], ["rules", "--help"], ["resolve", "--help"]])
    def test_help_exits_zero(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    @pytest.mark.parametrize("argv", [["pages"], ["rules"], ["resolve"], ["resolve", "sample_pages"]])
    def test_missing_args_exit_two(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "mirage" in capsys.readouterr().out


class TestLoadRegistry:
    def test_default_attribute(self) -> None:
        assert isinstance(load_registry("sample_pages"), VirtualPageRegistry)

    def test_factory(self) -> None:
        registry = load_registry("sample_pages:make_empty_registry")
        assert len(registry) == 0

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match="not a VirtualPageRegistry"):
            load_registry("sample_pages:not_a_registry")

    def test_failing_factory(self) -> None:
        with pytest.raises(TypeError, match="failed: no database"):
            load_registry("sample_pages:broken_registry")

    def test_factory_returning_wrong_type(self) -> None:
        with pytest.raises(TypeError, match="returned LoginPage"):
            load_registry("sample_pages:LoginPage")

    def test_empty_module_part_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["pages", ":registry"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_module_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["pages", "no_such_module_here:registry"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestPagesCommand:
    def test_lists_pages(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["pages", "sample_pages:registry"])
        out = capsys.readouterr().out
        assert "NAME" in out
        assert "login_page" in out
        assert "AccountPage" in out

    def test_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["pages", "sample_pages:make_empty_registry"])
        assert "No virtual pages registered." in capsys.readouterr().out


class TestRulesCommand:
    def test_lists_rules_in_order(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["rules", "sample_pages:registry"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["PRIORITY", "REGEX", "QUERY", "PAGE"]
        assert lines[2].split() == ["top", "^login/?$", "index.php?login_page=login", "login_page"]
        assert lines[4].split()[0] == "bottom"

    def test_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["rules", "sample_pages:make_empty_registry"])
        assert "No rewrite rules registered." in capsys.readouterr().out


class TestResolveCommand:
    def test_resolves_virtual_page(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["resolve", "sample_pages:registry", "/login"])
        out = capsys.readouterr().out
        assert "status:    200" in out
        assert "rule:      ^login/?$" in out
        assert "login_page = 'login'" in out
        assert "template:  /templates/page-login.html" in out

    def test_template_dir(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "account.html").write_text("account")
        main(["resolve", "sample_pages:registry", "/account", "--template-dir", str(tmp_path)])
        assert f"template:  {tmp_path / 'account.html'}" in capsys.readouterr().out

    def test_not_found(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["resolve", "sample_pages:registry", "/nowhere/at/all"])
        out = capsys.readouterr().out
        assert "status:    404" in out
        assert "rule:      -" in out
