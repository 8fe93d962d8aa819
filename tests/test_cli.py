import json
import logging

import pytest
from click.testing import CliRunner

from pgmigrate.cli import load_input_file, propose
from pgmigrate.core.exceptions import ConfigurationException

BASE_ARGS = ["--db-size", "500", "--cpu-cores", "4", "--ram-gb", "32"]


@pytest.fixture
def runner():
    return CliRunner()


def test_json_output(runner):
    result = runner.invoke(propose, BASE_ARGS + ["--current-cost", "1000", "--company", "Contoso",
                                                 "--format", "json"])

    assert result.exit_code == 0, result.output
    proposal = json.loads(result.stdout)["migration_proposal"]
    assert proposal["client"]["company_name"] == "Contoso"
    assert proposal["recommendation"]["vcores"] == 8
    assert proposal["costs"]["savings"]["percentage"] == 32.7
    assert proposal["timeline"]["total_weeks"] == 12


def test_text_output(runner):
    result = runner.invoke(propose, BASE_ARGS + ["--company", "Contoso", "--region", "westeurope"])

    assert result.exit_code == 0, result.output
    assert "Migration Proposal for Contoso" in result.stdout
    assert "Recommended Configuration (West Europe)" in result.stdout
    assert "General Purpose" in result.stdout
    assert "Not provided" in result.stdout
    assert "Assessment & Planning: Weeks 1-2 (2 weeks)" in result.stdout
    assert "Cutover & Go-Live: Weeks 12-12 (1 weeks)" in result.stdout


def test_text_output_with_savings(runner):
    result = runner.invoke(propose, BASE_ARGS + ["--current-cost", "1000"])

    assert result.exit_code == 0, result.output
    assert "-$327" in result.stdout
    assert "Cost reduction: 32.7%" in result.stdout


def test_urgency_option(runner):
    result = runner.invoke(propose, BASE_ARGS + ["--urgency", "urgent", "-f", "json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["migration_proposal"]["timeline"]["total_weeks"] == 7


def test_invalid_cpu_cores_exits_with_error(runner):
    result = runner.invoke(propose, ["--db-size", "500", "--cpu-cores", "0", "--ram-gb", "32"])

    assert result.exit_code == 1
    assert "cpu_cores" in result.output


def test_missing_required_fields_exits_with_error(runner):
    result = runner.invoke(propose, ["--cpu-cores", "4"])

    assert result.exit_code == 1
    assert "Invalid workload description" in result.output


def test_input_file_with_cli_overrides(runner, tmp_path):
    input_path = tmp_path / "workload.yaml"
    input_path.write_text(
        "workload:\n"
        "  db_size_gb: 1500\n"
        "  db_count: 15\n"
        "  cpu_cores: 8\n"
        "  ram_gb: 64\n"
        "  region: eastus\n"
        "client:\n"
        "  company_name: Fabrikam\n"
        "  industry: Finance\n"
    )
    output_path = tmp_path / "out" / "proposal.json"

    result = runner.invoke(propose, ["-i", str(input_path), "--region", "northeurope",
                                     "-f", "json", "-o", str(output_path)])

    assert result.exit_code == 0, result.output
    assert "Proposal saved to" in result.stdout
    proposal = json.loads(output_path.read_text())["migration_proposal"]
    assert proposal["client"] == {"company_name": "Fabrikam", "industry": "Finance"}
    assert proposal["workload"]["region"] == "northeurope"
    assert proposal["costs"]["region_multiplier"] == 1.02
    assert proposal["timeline"]["total_weeks"] == 17
    assert proposal["timeline"]["total_months"] == 5


def test_pricing_file_option(runner, tmp_path):
    pricing_path = tmp_path / "pricing.yaml"
    pricing_path.write_text("tiers:\n  generalPurpose:\n    vcore_price: 100\n")

    result = runner.invoke(propose, BASE_ARGS + ["--pricing-file", str(pricing_path), "-f", "json"])

    assert result.exit_code == 0, result.output
    proposal = json.loads(result.stdout)["migration_proposal"]
    assert proposal["costs"]["azure"]["breakdown"]["compute"] == pytest.approx(800.0)
    assert proposal["report_metadata"]["pricing_source"] == str(pricing_path)


def test_bad_pricing_file_exits_with_error(runner, tmp_path):
    result = runner.invoke(propose, BASE_ARGS + ["--pricing-file", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "Pricing file not found" in result.output


def test_undecodable_pricing_file_exits_with_error(runner, tmp_path):
    pricing_path = tmp_path / "pricing.yaml"
    pricing_path.write_bytes(b"tiers:\n  burstable:\n    vcore_price: \xff\xfe\n")

    result = runner.invoke(propose, BASE_ARGS + ["--pricing-file", str(pricing_path)])

    assert result.exit_code == 1
    assert "Cannot read pricing file" in result.output


def test_undecodable_input_file_exits_with_error(runner, tmp_path):
    input_path = tmp_path / "workload.yaml"
    input_path.write_bytes(b"workload:\n  db_size_gb: \xff\xfe\n")

    result = runner.invoke(propose, ["-i", str(input_path)])

    assert result.exit_code == 1
    assert "Cannot read input file" in result.output


def test_default_region_from_environment(runner, monkeypatch):
    monkeypatch.setenv("ESTIMATOR_DEFAULT_REGION", "EastAsia")

    result = runner.invoke(propose, BASE_ARGS + ["-f", "json"])

    assert result.exit_code == 0, result.output
    proposal = json.loads(result.stdout)["migration_proposal"]
    assert proposal["workload"]["region"] == "eastasia"
    assert proposal["costs"]["region_multiplier"] == 1.08


def test_log_level_from_environment(runner, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    result = runner.invoke(propose, BASE_ARGS + ["-f", "json"])

    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.ERROR
    assert json.loads(result.stdout)["migration_proposal"]["recommendation"]["vcores"] == 8


def test_debug_from_environment(runner, monkeypatch):
    monkeypatch.setenv("DEBUG", "true")

    result = runner.invoke(propose, BASE_ARGS)

    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.DEBUG


def test_verbose_flag_overrides_environment_log_level(runner, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    result = runner.invoke(propose, BASE_ARGS + ["--verbose"])

    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.INFO


def test_load_input_file_accepts_flat_json(tmp_path):
    path = tmp_path / "workload.json"
    path.write_text(json.dumps({"db_size_gb": 10, "cpu_cores": 2, "ram_gb": 4, "unrelated": True}))

    workload, client = load_input_file(path)

    assert workload == {"db_size_gb": 10, "cpu_cores": 2, "ram_gb": 4}
    assert client == {}


def test_load_input_file_rejects_non_mapping(tmp_path):
    path = tmp_path / "workload.yaml"
    path.write_text("- 1\n- 2\n")

    with pytest.raises(ConfigurationException):
        load_input_file(path)


def test_load_input_file_rejects_undecodable_bytes(tmp_path):
    path = tmp_path / "workload.yaml"
    path.write_bytes(b"\xff\xfe\x00db_size_gb: 10\n")

    with pytest.raises(ConfigurationException, match="Cannot read input file"):
        load_input_file(path)
