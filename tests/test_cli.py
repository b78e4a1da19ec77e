"""
Tests for the CLI interface.
"""
import logging
import os

import pytest
import yaml
from rich.logging import RichHandler
from typer.testing import CliRunner

from firebase_cost_estimator.cli.main import app, EXIT_CODE_PASS, EXIT_CODE_FAIL, PACKAGE_LOGGER

runner = CliRunner()


@pytest.fixture
def scenario_file(tmp_path):
    """Write a scenario file and return its path."""
    def _write(config_data: dict) -> str:
        path = tmp_path / "scenario.yaml"
        path.write_text(yaml.dump(config_data), encoding="utf-8")
        return str(path)
    return _write


ZERO_USAGE = {
    "firestore": {"reads": 0, "writes": 0, "deletes": 0, "storage_gib": 0, "egress_gib": 0},
    "realtime_db": {"storage_gb": 0, "egress_gb": 0},
    "storage": {"stored_gb": 0, "download_gb": 0},
    "functions": {"invocations": 0, "gb_seconds": 0, "vcpu_seconds": 0, "egress_gb": 0},
    "hosting": {"stored_gb": 0, "transfer_gb": 0},
    "auth": {"sms_verifications": 0},
}


class TestEstimateCommand:
    """Test the estimate command."""

    def test_default_estimate(self):
        """Test estimate with built-in defaults."""
        result = runner.invoke(app, ["estimate"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Monthly Cost Breakdown" in result.output
        assert "Cloud Firestore" in result.output
        assert "$2.36" in result.output
        assert "$4.65" in result.output
        assert "Est. Monthly Cost: $18.47" in result.output
        assert "Months Covered by Budget: 5.4" in result.output

    def test_budget_option(self):
        """Test the budget flag changes months covered."""
        result = runner.invoke(app, ["estimate", "--budget", "36.94"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Months Covered by Budget: 2.0" in result.output

    def test_zero_usage_shows_infinity(self, scenario_file):
        """Test all-zero usage reports an indefinite budget."""
        path = scenario_file({"budget": 100, "usage": ZERO_USAGE})
        result = runner.invoke(app, ["estimate", "--config", path])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Est. Monthly Cost: $0.00" in result.output
        assert "Months Covered by Budget: ∞" in result.output

    def test_zero_budget_shows_infinity(self):
        """Test a zero budget reports the sentinel."""
        result = runner.invoke(app, ["estimate", "--budget", "0"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Months Covered by Budget: ∞" in result.output

    def test_price_and_usage_overrides(self):
        """Test --price and --usage overrides."""
        result = runner.invoke(app, [
            "estimate",
            "--usage", "auth.sms_verifications=1000",
            "--price", "authSmsPerVerification=0.01",
        ])

        assert result.exit_code == EXIT_CODE_PASS
        # Auth adds 1000 * $0.01 = $10.00
        assert "$10.00" in result.output
        assert "Est. Monthly Cost: $28.47" in result.output

    def test_non_numeric_usage_treated_as_zero(self):
        """Test bad numbers coerce to zero instead of failing."""
        result = runner.invoke(app, ["estimate", "--usage", "hosting.transfer_gb=abc"])

        assert result.exit_code == EXIT_CODE_PASS
        # Hosting drops from $7.76 to $0.26
        assert "Est. Monthly Cost: $10.97" in result.output

    def test_detailed_shows_line_items(self):
        """Test --detailed lists line items."""
        result = runner.invoke(app, ["estimate", "--detailed"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "vcpu seconds" in result.output
        assert "$1.20" in result.output

    def test_unknown_price_key_fails(self):
        """Test unknown price keys exit with failure."""
        result = runner.invoke(app, ["estimate", "--price", "bogus=1"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Unknown price key: bogus" in result.output

    def test_malformed_assignment_fails(self):
        """Test options without '=' exit with failure."""
        result = runner.invoke(app, ["estimate", "--usage", "firestore.reads"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "expects KEY=VALUE" in result.output

    def test_usage_target_needs_category(self):
        """Test usage targets need a category prefix."""
        result = runner.invoke(app, ["estimate", "--usage", "reads=5"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Expected <category>.<field>" in result.output

    def test_missing_config_fails(self, tmp_path):
        """Test a missing scenario file exits with failure."""
        result = runner.invoke(app, ["estimate", "--config", os.path.join(str(tmp_path), "missing.yaml")])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Scenario file not found" in result.output

    def test_invalid_config_fails(self, scenario_file):
        """Test an invalid scenario file exits with failure."""
        path = scenario_file({"budget": -5})
        result = runner.invoke(app, ["estimate", "--config", path])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "must be >= 0" in result.output


class TestPricesCommand:
    """Test the prices command."""

    def test_lists_all_prices(self):
        """Test every price key is listed with its default."""
        result = runner.invoke(app, ["prices"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "firestoreReadPer100k" in result.output
        assert "authSmsPerVerification" in result.output
        assert "2.5e-06" in result.output


class TestInteractiveCommand:
    """Test the interactive editing session."""

    def test_edits_recalculate_totals(self):
        """Test every edit prints an updated total."""
        result = runner.invoke(
            app,
            ["interactive"],
            input="auth.sms_verifications 1000\nprice.authSmsPerVerification 0.01\nquit\n",
        )

        assert result.exit_code == EXIT_CODE_PASS
        # 18.47 + 1000 * 0.06, then 18.47 + 1000 * 0.01
        assert "Total per month: $78.47" in result.output
        assert "Total per month: $28.47" in result.output

    def test_budget_edit(self):
        """Test budget edits update months covered."""
        result = runner.invoke(app, ["interactive"], input="budget 0\nquit\n")

        assert result.exit_code == EXIT_CODE_PASS
        assert "Months covered: ∞" in result.output

    def test_reset(self):
        """Test reset restores the default total."""
        result = runner.invoke(app, ["interactive"], input="hosting.transfer_gb 0\nreset\nquit\n")

        assert result.exit_code == EXIT_CODE_PASS
        assert "Total per month: $10.97" in result.output
        assert "Total per month: $18.47" in result.output

    def test_unknown_field_reports_error(self):
        """Test a bad field name is reported and the session continues."""
        result = runner.invoke(app, ["interactive"], input="firestore.readz 5\nbudget 200\nquit\n")

        assert result.exit_code == EXIT_CODE_PASS
        assert "Unknown field 'readz'" in result.output
        assert "Budget: $200.00" in result.output

    def test_end_of_input_exits_cleanly(self):
        """Test running out of input ends the session."""
        result = runner.invoke(app, ["interactive"], input="")

        assert result.exit_code == EXIT_CODE_PASS
        assert "Exiting." in result.output

    def test_fields_listing(self):
        """Test the fields command lists editable targets."""
        result = runner.invoke(app, ["interactive"], input="fields\nquit\n")

        assert result.exit_code == EXIT_CODE_PASS
        assert "firestore.reads" in result.output
        assert "price.rtdbStoragePerGB" in result.output


class TestMainCallback:
    """Test top-level options."""

    def test_version(self):
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "firebase-cost-estimator" in result.output

    def test_no_command(self):
        """Test running without a command prints a hint."""
        result = runner.invoke(app, [])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Use --help" in result.output

    def test_logging_leaves_root_handlers_alone(self):
        """Test repeated invocations don't replace the host's root handlers."""
        root = logging.getLogger()
        sentinel = logging.NullHandler()
        root.addHandler(sentinel)
        try:
            runner.invoke(app, ["--verbose", "prices"])
            runner.invoke(app, ["prices"])

            assert sentinel in root.handlers
            package_logger = logging.getLogger(PACKAGE_LOGGER)
            rich_handlers = [h for h in package_logger.handlers if isinstance(h, RichHandler)]
            assert len(rich_handlers) == 1
            assert package_logger.level == logging.WARNING
        finally:
            root.removeHandler(sentinel)
