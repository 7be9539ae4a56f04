"""
Module C1 - CLI Unit Tests
Tests for forest_cli/main.py and its commands.
"""
import json

import pytest

from forest_cli import __version__
from forest_cli.main import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, create_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_build_arguments(self):
        args = create_parser().parse_args(["build", "7", "--salt", "s", "--json"])

        assert args.command == "build"
        assert args.leaf_count == 7
        assert args.salt == "s"
        assert args.json is True

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            main(["--version"])

        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
        assert "usage" in capsys.readouterr().out.lower()


class TestBuildCommand:
    """Tests for `forest build`."""

    def test_human_output(self, capsys):
        assert main(["build", "5", "--salt", "demo"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "leaves: 5" in out
        assert "roots: 2" in out
        assert "nodes: 8" in out
        assert "L0: leaf-0" in out

    def test_json_output(self, capsys):
        assert main(["build", "6", "--salt", "demo", "--json"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["leaf_count"] == 6
        assert data["root_count"] == 2
        assert data["edge_count"] == 8
        assert len(data["forest"]["nodes"]) == 10
        assert "svg_path" not in data

    def test_svg_written(self, tmp_path, capsys):
        path = tmp_path / "forest.svg"

        assert main(["build", "3", "--svg", str(path)]) == EXIT_SUCCESS

        assert path.read_text(encoding="utf-8").startswith("<svg")
        assert f"svg: {path}" in capsys.readouterr().out

    def test_negative_leaf_count(self, capsys):
        assert main(["build", "-1"]) == EXIT_RUNTIME_ERROR
        assert "non-negative" in capsys.readouterr().err


class TestDemoCommand:
    """Tests for `forest demo`."""

    def test_runs_to_max_leaves(self, capsys):
        code = main(["demo", "--max-leaves", "4", "--interval", "0", "--json"])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert [t["leaf_count"] for t in data["ticks"]] == [1, 2, 3, 4]
        assert [t["root_count"] for t in data["ticks"]] == [1, 1, 2, 1]
        assert data["final_leaf_count"] == 4

    def test_stop_after(self, capsys):
        code = main([
            "demo", "--max-leaves", "10", "--interval", "0", "--stop-after", "3", "--json",
        ])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert len(data["ticks"]) == 3
        assert data["final_leaf_count"] == 3

    def test_human_output(self, capsys):
        assert main(["demo", "--max-leaves", "2", "--interval", "0"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "tick 2: leaves=2 roots=1" in out
        assert "Demo finished at 2 leaves" in out

    def test_invalid_max_leaves(self, capsys):
        assert main(["demo", "--max-leaves", "0"]) == EXIT_RUNTIME_ERROR
        assert "auto_max_leaves" in capsys.readouterr().err


class TestConfigCommand:
    """Tests for `forest config`."""

    def test_init_creates_template(self, tmp_path, capsys):
        path = tmp_path / "forest.json"

        assert main(["config", "--init", "--path", str(path)]) == EXIT_SUCCESS

        data = json.loads(path.read_text())
        assert data["demo"]["auto_max_leaves"] == 8

    def test_init_refuses_existing(self, tmp_path, capsys):
        path = tmp_path / "forest.json"
        path.write_text("{}")

        assert main(["config", "--init", "--path", str(path)]) == EXIT_RUNTIME_ERROR
        assert "already exists" in capsys.readouterr().err

    def test_show_uses_config_file(self, tmp_path, capsys):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"demo": {"auto_interval": 0.25}}))

        assert main(["--config", str(path), "config", "--show"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["demo"]["auto_interval"] == 0.25

    def test_missing_config_file(self, tmp_path, capsys):
        code = main(["--config", str(tmp_path / "nope.json"), "config", "--show"])

        assert code == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err
