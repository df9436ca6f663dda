"""Tests for the command-line interface."""

import json
import zipfile

import pytest
from click.testing import CliRunner
from rich.console import Console

from ralph_bundle.cli import main
from ralph_bundle.rendering import serialize_prd


@pytest.fixture
def runner(monkeypatch):
    # Wide console so long paths don't wrap the lines being asserted on
    monkeypatch.setattr("ralph_bundle.cli.console", Console(width=300))
    return CliRunner()


class TestProvidersCommand:
    def test_lists_catalog(self, runner):
        result = runner.invoke(main, ["providers"])

        assert result.exit_code == 0
        assert "LLM Providers" in result.output


class TestGenerateCommand:
    def test_writes_zip(self, runner, tmp_path):
        result = runner.invoke(main, [
            "generate",
            "--name", "My Cool App!",
            "--description", "Demo",
            "-f", "Add login form",
            "-f", "Add API endpoint for export",
            "-o", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        archive = tmp_path / "ralph-bundle-my-cool-app.zip"
        assert archive.exists()

        with zipfile.ZipFile(archive) as zf:
            prd = json.loads(zf.read("scripts/ralph/prd.json"))
            assert prd["branchName"] == "ralph/my-cool-app"
            assert [s["id"] for s in prd["userStories"]] == ["US-001", "US-002"]
            assert "MAX_ITERATIONS=${1:-10}" in zf.read("scripts/ralph/ralph.sh").decode()

    def test_writes_directory_with_options(self, runner, tmp_path):
        features = tmp_path / "features.txt"
        features.write_text("- Add login form\n\n- Add export service\n")
        doc = tmp_path / "SKILL.md"
        doc.write_text("# Skill\n")

        result = runner.invoke(main, [
            "generate",
            "--name", "Demo",
            "--features-file", str(features),
            "--provider", "GPT_4O",
            "--format", "dir",
            "--max-iterations", "5",
            "--reference-doc", str(doc),
            "-o", str(tmp_path / "out"),
        ])

        assert result.exit_code == 0, result.output
        root = tmp_path / "out" / "ralph-bundle-demo"
        script = (root / "scripts" / "ralph" / "ralph.sh").read_text()
        assert "MAX_ITERATIONS=${1:-5}" in script
        assert "openai api chat.completions.create --model gpt-4o" in script
        assert (root / "docs" / "SKILL.md").read_text() == "# Skill\n"
        prd = json.loads((root / "scripts" / "ralph" / "prd.json").read_text())
        assert len(prd["userStories"]) == 2
        assert prd["llmProvider"] == "GPT_4O"

    def test_config_file(self, runner, tmp_path):
        config = tmp_path / "ralph.json"
        config.write_text(json.dumps({"archive_format": "dir", "default_provider": "CLAUDE_SONNET"}))

        result = runner.invoke(main, [
            "generate", "--name", "Demo", "-f", "Add login form",
            "--config", str(config), "-o", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        prd = json.loads((tmp_path / "ralph-bundle-demo" / "scripts" / "ralph" / "prd.json").read_text())
        assert prd["llmProvider"] == "CLAUDE_SONNET"

    def test_bad_config_file(self, runner, tmp_path):
        config = tmp_path / "ralph.json"
        config.write_text(json.dumps({"max_iterations": -1}))

        result = runner.invoke(main, [
            "generate", "--name", "Demo", "-f", "Add login form",
            "--config", str(config), "-o", str(tmp_path),
        ])

        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_undecodable_features_file(self, runner, tmp_path):
        features = tmp_path / "features.txt"
        features.write_bytes(b"\xff\xfeAdd login form\n")

        result = runner.invoke(main, [
            "generate", "--name", "Demo", "--features-file", str(features),
            "-o", str(tmp_path / "out"),
        ])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Cannot read" in result.output
        assert not (tmp_path / "out").exists()

    def test_undecodable_reference_doc(self, runner, tmp_path):
        doc = tmp_path / "SKILL.md"
        doc.write_bytes(b"\xff\xfe# Skill\n")

        result = runner.invoke(main, [
            "generate", "--name", "Demo", "-f", "Add login form",
            "--reference-doc", str(doc), "-o", str(tmp_path / "out"),
        ])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error:" in result.output
        assert not (tmp_path / "out").exists()

    def test_dry_run_writes_nothing(self, runner, tmp_path):
        result = runner.invoke(main, [
            "generate", "--name", "Demo", "-f", "Add login form",
            "--dry-run", "-o", str(tmp_path / "out"),
        ])

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert not (tmp_path / "out").exists()

    def test_blank_features_rejected(self, runner, tmp_path):
        result = runner.invoke(main, [
            "generate", "--name", "Demo", "-f", "   ", "-o", str(tmp_path),
        ])

        assert result.exit_code == 1
        assert "At least one feature is required" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_violations_listed(self, runner, tmp_path):
        result = runner.invoke(main, [
            "generate", "--name", "   ", "-f", "Add login form", "-f", "*",
            "-o", str(tmp_path),
        ])

        assert result.exit_code == 1
        assert "Project name is required" in result.output
        assert "Story 2: Title is required" in result.output

    def test_prompts_for_name(self, runner, tmp_path):
        result = runner.invoke(
            main,
            ["generate", "-f", "Add login form", "--dry-run", "-o", str(tmp_path)],
            input="Prompted App\n",
        )

        assert result.exit_code == 0, result.output
        assert "Prompted App" in result.output


class TestValidateCommand:
    def test_valid_file(self, runner, tmp_path, sample_prd):
        path = tmp_path / "prd.json"
        path.write_text(serialize_prd(sample_prd))

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 0, result.output
        assert "is valid" in result.output

    def test_violations(self, runner, tmp_path, sample_prd):
        bad = sample_prd.model_copy(update={"branch_name": "feature/x"})
        path = tmp_path / "prd.json"
        path.write_text(serialize_prd(bad))

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 1
        assert 'Branch name must start with "ralph/"' in result.output

    def test_missing_keys_reported_as_violations(self, runner, tmp_path, sample_prd):
        data = json.loads(serialize_prd(sample_prd))
        del data["project"]
        del data["branchName"]
        del data["userStories"][0]["title"]
        path = tmp_path / "prd.json"
        path.write_text(json.dumps(data))

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Not a valid PRD document" not in result.output
        assert "Project name is required" in result.output
        assert 'Branch name must start with "ralph/"' in result.output
        assert "Story 1: Title is required" in result.output

    def test_undecodable_file(self, runner, tmp_path):
        path = tmp_path / "prd.json"
        path.write_bytes(b"\xff\xfe{}")

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Cannot read" in result.output

    def test_not_a_prd(self, runner, tmp_path):
        path = tmp_path / "prd.json"
        path.write_text('{"hello": "world"}')

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Not a valid PRD document" in result.output
