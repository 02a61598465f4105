"""CLI Evals -- `emailbuddy rewrite`, `config` and `doctor` without a network."""

import json

from typer.testing import CliRunner

from emailbuddy import cli
from emailbuddy.config import save_config

runner = CliRunner()


class TestRewriteCommand:
    def test_rewrite_with_mock_provider(self, emailbuddy_home):
        save_config({"providerOrder": ["mock"], "history": {"enabled": True}})

        result = runner.invoke(cli.app, ["rewrite", "hello team", "--mode", "concise"])

        assert result.exit_code == 0
        assert "[concise] hello team" in result.output
        record = json.loads((emailbuddy_home / "history.jsonl").read_text())
        assert record["provider"] == "mock"

    def test_blank_text_fails(self):
        result = runner.invoke(cli.app, ["rewrite", "   "])
        assert result.exit_code == 1
        assert "text is required" in result.output

    def test_all_providers_failed(self):
        save_config({"providerOrder": ["openai"]})
        result = runner.invoke(cli.app, ["rewrite", "hi"])
        assert result.exit_code == 1
        assert "All providers failed" in result.output


class TestConfigCommand:
    def test_prints_effective_config(self):
        save_config({"timeoutMs": 4000})
        result = runner.invoke(cli.app, ["config"])
        assert result.exit_code == 0
        assert '"timeoutMs": 4000' in result.output


class TestDoctorCommand:
    def test_reports_checks(self, monkeypatch):
        async def fake_checks(model):
            return {
                "defaultLocalModel": model,
                "ollamaInstalled": False,
                "ollamaVersion": None,
                "ollamaServeReachable": False,
                "ollamaModelPulled": False,
            }

        monkeypatch.setattr(cli, "get_system_checks", fake_checks)
        result = runner.invoke(cli.app, ["doctor", "--model", "phi3:mini"])

        assert result.exit_code == 0
        assert "FAIL" in result.output
        assert "phi3:mini" in result.output
