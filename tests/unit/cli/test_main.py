"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from hybridfuse.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def result_files(tmp_path):
    """Vector and keyword result files in the two accepted formats."""
    vector_file = tmp_path / "vector.json"
    keyword_file = tmp_path / "keyword.json"
    vector_file.write_text(json.dumps([["A", 5.0], ["B", 4.99], ["C", 0.0]]))
    keyword_file.write_text(
        json.dumps(
            {"hits": [{"id": "A", "score": 5.0}, {"id": "B", "score": 0.01}, {"id": "C", "score": 0.0}]}
        )
    )
    return str(vector_file), str(keyword_file)


class TestFuseCommand:
    """Tests for `hybridfuse fuse`."""

    def test_json_output(self, runner: CliRunner, result_files) -> None:
        """JSON output contains the fused hits."""
        vector_file, keyword_file = result_files
        result = runner.invoke(
            cli,
            ["fuse", vector_file, keyword_file, "--algorithm", "relativeScoreFusion", "--json"],
            obj={},
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["algorithm"] == "relativeScoreFusion"
        assert [hit["object_id"] for hit in payload["hits"]] == ["A", "B", "C"]
        assert payload["hits"][1]["fused_score"] == pytest.approx(0.5)

    def test_table_output(self, runner: CliRunner, result_files) -> None:
        """Table output lists the objects."""
        vector_file, keyword_file = result_files
        result = runner.invoke(cli, ["fuse", vector_file, keyword_file, "--limit", "2"], obj={})

        assert result.exit_code == 0, result.output
        assert "rankedFusion" in result.output
        assert "A" in result.output
        assert "B" in result.output

    def test_invalid_alpha(self, runner: CliRunner, result_files) -> None:
        """Invalid weights exit with an error."""
        vector_file, keyword_file = result_files
        result = runner.invoke(cli, ["fuse", vector_file, keyword_file, "--alpha", "1.5"], obj={})

        assert result.exit_code == 1
        assert "alpha" in result.output

    def test_invalid_file(self, runner: CliRunner, tmp_path, result_files) -> None:
        """Unparseable files exit with an error."""
        bad_file = tmp_path / "bad.json"
        bad_file.write_text("{not json")
        result = runner.invoke(cli, ["fuse", str(bad_file), result_files[1]], obj={})

        assert result.exit_code == 1
        assert "Invalid result file" in result.output


class TestOtherCommands:
    """Tests for retrieval-limit and config commands."""

    def test_retrieval_limit(self, runner: CliRunner) -> None:
        """Relative fusion over-searches."""
        result = runner.invoke(
            cli, ["retrieval-limit", "10", "--algorithm", "relativeScoreFusion"], obj={}
        )
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "30"

    def test_config_init_and_show(self, runner: CliRunner, tmp_path) -> None:
        """A written config file can be loaded back."""
        config_file = tmp_path / "hybridfuse.yaml"

        result = runner.invoke(cli, ["config", "init", str(config_file)], obj={})
        assert result.exit_code == 0, result.output
        assert config_file.exists()

        result = runner.invoke(cli, ["--config", str(config_file), "config", "show"], obj={})
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["fusion"]["default_algorithm"] == "rankedFusion"

    def test_config_init_refuses_overwrite(self, runner: CliRunner, tmp_path) -> None:
        """Existing files are kept unless forced."""
        config_file = tmp_path / "hybridfuse.yaml"
        config_file.write_text("log_level: DEBUG\n")

        result = runner.invoke(cli, ["config", "init", str(config_file)], obj={})
        assert result.exit_code == 1
        assert config_file.read_text() == "log_level: DEBUG\n"
