"""Tests for tenantscope CLI commands."""

import json

import pytest
import yaml
from click.testing import CliRunner

from conftest import BASELINE, PATIENT, REPO_BASELINE, write_baseline
from tenantscope.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def env(tmp_path, baseline_dir, store, monkeypatch):
    """Point the CLI at the seeded test database and baseline."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("TENANTSCOPE_DB_PATH", str(tmp_path / "test.db"))
    monkeypatch.setenv("TENANTSCOPE_BASELINE_PATH", str(baseline_dir))
    return store


SCOPE = ["--tenant", "t1", "--company", "c1", "--branch", "b1"]


class TestBaselineValidate:
    def test_shipped_baseline(self, runner):
        result = runner.invoke(cli, ["baseline", "validate", "--path", str(REPO_BASELINE)])
        assert result.exit_code == 0, result.output
        assert "Baseline is valid." in result.output
        assert "template clinicType:AUDIOLOGY" in result.output

    def test_uses_env_path(self, runner, env):
        result = runner.invoke(cli, ["baseline", "validate"])
        assert result.exit_code == 0, result.output
        assert "Baseline test-1: 1 entities, 1 templates" in result.output

    def test_missing_directory(self, runner, tmp_path):
        result = runner.invoke(cli, ["baseline", "validate", "--path", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_schema_error(self, runner, tmp_path):
        broken = {"baseline": {"version": "x", "features": "LabModule", "navigation": []}}
        baseline_dir = write_baseline(tmp_path, baseline=broken)
        result = runner.invoke(cli, ["baseline", "validate", "--path", str(baseline_dir)])
        assert result.exit_code == 1
        assert "schema error(s) found" in result.output

    def test_integrity_error(self, runner, tmp_path):
        entity = yaml.safe_load(yaml.safe_dump(PATIENT))
        entity["formLayout"]["sections"][0]["fields"].append("nickname")
        baseline_dir = write_baseline(tmp_path, entities=[entity])
        result = runner.invoke(cli, ["baseline", "validate", "--path", str(baseline_dir)])
        assert result.exit_code == 1
        assert "unknown field 'nickname'" in result.output

    def test_semantic_error(self, runner, tmp_path):
        broken = yaml.safe_load(yaml.safe_dump(BASELINE))
        broken["baseline"]["navigation"].append({"id": "lab"})
        baseline_dir = write_baseline(tmp_path, baseline=broken)
        result = runner.invoke(cli, ["baseline", "validate", "--path", str(baseline_dir)])
        assert result.exit_code == 1
        assert "Semantic validation failed" in result.output


class TestContextCommands:
    def test_resolve_prints_json(self, runner, env):
        result = runner.invoke(cli, ["context", "resolve", *SCOPE, "--role", "Admin"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["companyName"] == "Acme Dubai"
        assert data["userId"] == "cli"
        assert [item["id"] for item in data["navigation"]] == ["dashboard", "lab", "inventory", "admin"]

    def test_resolve_unknown_branch(self, runner, env):
        result = runner.invoke(cli, ["context", "resolve", "--tenant", "t1", "--company", "c1", "--branch", "b2"])
        assert result.exit_code == 2
        assert "Not found" in result.output

    def test_resolve_bad_baseline(self, runner, env, tmp_path):
        result = runner.invoke(cli, ["context", "resolve", *SCOPE, "--baseline-path", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "Baseline not found" in result.output

    def test_check_clean(self, runner, env):
        result = runner.invoke(cli, ["context", "check", *SCOPE])
        assert result.exit_code == 0, result.output
        assert "All layout references resolve." in result.output

    def test_check_reports_override_error(self, runner, env):
        env.put_override("tenant", "t1", "listLayouts", {"patient": {"columns": [{"field": "email"}]}})
        result = runner.invoke(cli, ["context", "check", *SCOPE])
        assert result.exit_code == 1
        assert "unknown field 'email'" in result.output


class TestStoreCommands:
    def test_seed_hierarchy(self, runner, env):
        assert runner.invoke(cli, ["store", "add-tenant", "t9", "New Clinic"]).exit_code == 0
        assert runner.invoke(cli, ["store", "add-company", "c9", "t9", "New Clinic LLC", "--clinic-type", "AUDIOLOGY"]).exit_code == 0
        assert runner.invoke(cli, ["store", "add-branch", "b9", "c9", "Marina"]).exit_code == 0
        hierarchy = env.get_hierarchy("t9", "c9", "b9")
        assert hierarchy.valid
        assert hierarchy.clinic_type == "AUDIOLOGY"

    def test_set_and_delete_override(self, runner, env, tmp_path):
        body = tmp_path / "settings.json"
        body.write_text(json.dumps({"currency": "USD"}))
        result = runner.invoke(cli, ["store", "set-override", "company", "c1", "settings", str(body)])
        assert result.exit_code == 0, result.output
        assert env.get_company_overrides("c1").section("settings") == {"currency": "USD"}

        result = runner.invoke(cli, ["store", "delete-override", "company", "c1", "settings"])
        assert result.exit_code == 0
        assert env.get_company_overrides("c1") is None

    def test_set_override_rejects_invalid_json(self, runner, env, tmp_path):
        body = tmp_path / "bad.json"
        body.write_text("{currency: USD")
        result = runner.invoke(cli, ["store", "set-override", "tenant", "t1", "settings", str(body)])
        assert result.exit_code == 1
        assert env.get_tenant_overrides("t1") is None

    def test_unknown_section(self, runner, env, tmp_path):
        body = tmp_path / "x.json"
        body.write_text("{}")
        result = runner.invoke(cli, ["store", "set-override", "tenant", "t1", "colours", str(body)])
        assert result.exit_code == 2

    def test_delete_missing_override(self, runner, env):
        result = runner.invoke(cli, ["store", "delete-override", "tenant", "t1", "features"])
        assert result.exit_code == 1
        assert "No features override" in result.output
