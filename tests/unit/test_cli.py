"""Unit tests for CLI interface."""

import typer
from typer.testing import CliRunner

from src.depcycle import __version__
from src.depcycle.cli import app

runner = CliRunner()


class TestCLI:
    """Test CLI interface."""

    def test_cli_app_structure(self):
        """Test CLI app structure."""
        assert isinstance(app, typer.Typer)

    def test_check_acyclic(self, acyclic_csv):
        """Test a clean edge file exits 0."""
        result = runner.invoke(app, ["check", str(acyclic_csv)])

        assert result.exit_code == 0
        assert "PASS: No cycles detected" in result.stdout
        assert "Nodes" in result.stdout

    def test_check_cyclic(self, cyclic_csv):
        """Test the closing edge is reported and exit code is 1."""
        result = runner.invoke(app, ["check", str(cyclic_csv)])

        assert result.exit_code == 1
        assert "Cycle closed by edge c -> a (line 5)" in result.stdout
        assert "Affected nodes: a, b, c, d, e" in result.stdout

    def test_check_fail_fast(self, cyclic_csv):
        """Test fail-fast stops at the closing edge."""
        result = runner.invoke(app, ["check", str(cyclic_csv), "--fail-fast"])

        assert result.exit_code == 1
        assert "FAIL:" in result.stdout
        assert "c -> a" in result.stdout
        assert "Dependency Graph" not in result.stdout

    def test_check_fail_fast_from_config(self, cyclic_csv, tmp_path):
        """Test the config file enables fail-fast."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("validation:\n  fail_fast: true\n")

        result = runner.invoke(app, ["check", str(cyclic_csv), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Dependency Graph" not in result.stdout

    def test_check_invalid_row_strict(self, write_edges):
        """Test an invalid row fails the check."""
        path = write_edges("source,target\na,\n")

        result = runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 1
        assert "Invalid edge file" in result.stdout

    def test_check_invalid_row_non_strict(self, write_edges):
        """Test invalid rows are skipped with --no-strict."""
        path = write_edges("source,target\na,\na,b\n")

        result = runner.invoke(app, ["check", str(path), "--no-strict"])

        assert result.exit_code == 0
        assert "Skipped 1 invalid rows" in result.stdout

    def test_check_writes_dot(self, cyclic_csv, tmp_path):
        """Test DOT export."""
        dot_file = tmp_path / "out" / "graph.dot"

        result = runner.invoke(app, ["check", str(cyclic_csv), "--dot", str(dot_file)])

        assert result.exit_code == 1
        content = dot_file.read_text()
        assert content.startswith("digraph DependencyGraph {")
        assert '"c" -> "a";' in content

    def test_check_bad_config(self, acyclic_csv, tmp_path):
        """Test a broken config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- not a mapping\n")

        result = runner.invoke(app, ["check", str(acyclic_csv), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Could not load configuration" in result.stdout

    def test_check_missing_file(self, tmp_path):
        """Test typer rejects a nonexistent edge file."""
        result = runner.invoke(app, ["check", str(tmp_path / "missing.csv")])

        assert result.exit_code != 0

    def test_check_invalid_utf8(self, tmp_path):
        """Test undecodable input exits cleanly with code 1."""
        path = tmp_path / "edges.csv"
        path.write_bytes(b"source,target\n\xff\xfe,b\n")

        result = runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid edge file" in result.stdout

    def test_check_directory_rejected(self, tmp_path):
        """Test a directory is refused as a usage error."""
        result = runner.invoke(app, ["check", str(tmp_path)])

        assert result.exit_code == 2
        assert isinstance(result.exception, SystemExit)

    def test_check_config_wrong_type(self, acyclic_csv, tmp_path):
        """Test a non-string log level in the config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logging:\n  level: 10\n")

        result = runner.invoke(app, ["check", str(acyclic_csv), "--config", str(config_file)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Could not load configuration" in result.stdout

    def test_version_command(self):
        """Test version command."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout
