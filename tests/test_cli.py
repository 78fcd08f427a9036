"""Tests for the depsolve command line interface."""

import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from depsolve._cli.main import app

runner = CliRunner()

# --- Fixtures ---


@pytest.fixture
def desktop_file(tmp_path: Path) -> Path:
    path = tmp_path / "desktop.toml"
    path.write_text(
        """
[[nodes]]
name = "boot"

[[nodes]]
name = "xorg"
depends = ["boot"]

[[nodes]]
name = "dwm"
depends = ["xorg"]

[[nodes]]
name = "net"
depends = ["boot"]

[[nodes]]
name = "firefox"
depends = ["net", "xorg"]
""",
    )
    return path


@pytest.fixture
def cyclic_file(tmp_path: Path) -> Path:
    path = tmp_path / "cyclic.toml"
    path.write_text(
        """
[[nodes]]
name = "alpha"
depends = ["beta"]

[[nodes]]
name = "beta"
depends = ["alpha"]

[[nodes]]
name = "gamma"
depends = ["gamma"]
""",
    )
    return path


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in a directory with an empty pyproject.toml so no outer config leaks in."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    (workdir / "pyproject.toml").write_text("[project]\nname = 'work'\n")
    monkeypatch.chdir(workdir)
    return workdir


# --- solve ---


class TestSolveCommand:
    """Tests for the solve command."""

    def test_prints_order(self, desktop_file: Path, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["solve", str(desktop_file)])

        assert result.exit_code == 0, result.output
        positions = [result.output.index(name) for name in ("boot", "xorg", "net", "dwm", "firefox")]
        assert positions == sorted(positions)

    def test_breaks_cycles_by_default(self, cyclic_file: Path, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["solve", str(cyclic_file), "--show-repairs"])

        assert result.exit_code == 0, result.output
        assert "Broke 2 cycle(s)" in result.output

    def test_strict_fails_on_cycle(self, cyclic_file: Path, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["solve", str(cyclic_file), "--strict"])

        assert result.exit_code == 1
        assert "Cycle detected" in result.output

    def test_writes_output_file(self, desktop_file: Path, tmp_path: Path, isolated_cwd: Path) -> None:
        output = tmp_path / "order.toml"

        result = runner.invoke(app, ["solve", str(desktop_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        with output.open("rb") as f:
            data = tomllib.load(f)
        assert data["order"] == ["boot", "xorg", "net", "dwm", "firefox"]
        assert data["acyclic"] is True

    def test_missing_file(self, tmp_path: Path, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["solve", str(tmp_path / "nope.toml")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_file(self, tmp_path: Path, isolated_cwd: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text('[[nodes]]\nname = "a"\ndepends = ["b"]\n')

        result = runner.invoke(app, ["solve", str(path)])

        assert result.exit_code == 1
        assert "Invalid graph document" in result.output

    def test_invalid_encoding(self, tmp_path: Path, isolated_cwd: Path) -> None:
        path = tmp_path / "latin1.toml"
        path.write_bytes(b'[[nodes]]\nname = "caf\xe9"\n')

        result = runner.invoke(app, ["solve", str(path)])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_directory_instead_of_file(self, tmp_path: Path, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["solve", str(tmp_path)])

        assert result.exit_code == 1
        assert "not found" in result.output
        assert not isinstance(result.exception, IsADirectoryError)

    def test_no_graph_given(self, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["solve"])

        assert result.exit_code == 1
        assert "Graph file required" in result.output

    def test_uses_config(self, cyclic_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text(
            f'[tool.depsolve]\ngraph = "{cyclic_file.name}"\nstrict = true\n',
        )
        monkeypatch.chdir(tmp_path)

        assert runner.invoke(app, ["solve"]).exit_code == 1
        assert runner.invoke(app, ["solve", "--no-strict"]).exit_code == 0

    def test_invalid_config(self, desktop_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.depsolve]\nstrict = 1\n")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["solve", str(desktop_file)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


# --- check ---


class TestCheckCommand:
    """Tests for the check command."""

    def test_acyclic(self, desktop_file: Path, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["check", str(desktop_file)])

        assert result.exit_code == 0, result.output
        assert "Graph is acyclic" in result.output

    def test_cyclic(self, cyclic_file: Path, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["check", str(cyclic_file)])

        assert result.exit_code == 1
        assert "depending on themselves" in result.output
        assert "gamma" in result.output


# --- show ---


class TestShowCommand:
    """Tests for the show command."""

    def test_lists_nodes(self, desktop_file: Path, isolated_cwd: Path) -> None:
        result = runner.invoke(app, ["show", str(desktop_file)])

        assert result.exit_code == 0, result.output
        assert "firefox" in result.output
        assert "Total: 5 nodes" in result.output
