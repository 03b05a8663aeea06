"""
Tests for the command-line entry point.
"""

from unittest.mock import Mock, patch

from typer.testing import CliRunner

from portsync.core.exceptions import ConfigError
from portsync.infrastructure.config.models import ApplicationConfig
from portsync.main import cli


class TestMainCLI:
    """Test cases for the portsync command."""

    def setup_method(self) -> None:
        self.runner = CliRunner()

    def test_help(self) -> None:
        """Test the help output."""
        result = self.runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "HOST" in result.output

    def test_missing_host_is_usage_error(self) -> None:
        """Test that running without a host fails with usage."""
        result = self.runner.invoke(cli, [])

        assert result.exit_code == 2

    def test_extra_argument_is_usage_error(self) -> None:
        """Test that more than one positional argument fails with usage."""
        result = self.runner.invoke(cli, ["dev", "other"])

        assert result.exit_code == 2

    @patch('portsync.main.ConfigLoader')
    @patch('portsync.main.setup_logging')
    @patch('portsync.main.asyncio.run')
    def test_clean_shutdown_exits_zero(self, mock_run: Mock, mock_setup_logging: Mock, mock_config_loader: Mock) -> None:
        """Test that a clean shutdown exits with status zero."""
        mock_config_loader.return_value.load_config.return_value = ApplicationConfig()
        mock_run.side_effect = lambda coro: (coro.close(), 0)[1]

        result = self.runner.invoke(cli, ["dev"])

        assert result.exit_code == 0
        mock_setup_logging.assert_called_once()
        mock_run.assert_called_once()

    @patch('portsync.main.ConfigLoader')
    @patch('portsync.main.setup_logging')
    @patch('portsync.main.asyncio.run')
    def test_fault_exits_nonzero(self, mock_run: Mock, mock_setup_logging: Mock, mock_config_loader: Mock) -> None:
        """Test that a fault is reflected in the exit status."""
        mock_config_loader.return_value.load_config.return_value = ApplicationConfig()
        mock_run.side_effect = lambda coro: (coro.close(), 1)[1]

        result = self.runner.invoke(cli, ["dev"])

        assert result.exit_code == 1

    @patch('portsync.main.ConfigLoader')
    @patch('portsync.main.setup_logging')
    @patch('portsync.main.run_application')
    @patch('portsync.main.asyncio.run')
    def test_options_override_config(
        self, mock_run: Mock, mock_run_application: Mock, mock_setup_logging: Mock, mock_config_loader: Mock
    ) -> None:
        """Test that command line options override loaded configuration."""
        config = ApplicationConfig()
        mock_config_loader.return_value.load_config.return_value = config
        mock_run.return_value = 0

        result = self.runner.invoke(cli, [
            "dev",
            "--config", "portsync.yaml",
            "--poll-interval", "0.5",
            "--machine-binary", "/opt/dm",
            "--log-level", "warning",
        ])

        assert result.exit_code == 0
        mock_config_loader.return_value.load_config.assert_called_once_with("portsync.yaml")
        assert config.reconciler.poll_interval == 0.5
        assert config.machine.binary == "/opt/dm"
        assert config.logging.level == "WARNING"
        mock_run_application.assert_called_once_with("dev", config)

    @patch('portsync.main.ConfigLoader')
    @patch('portsync.main.setup_logging')
    @patch('portsync.main.asyncio.run')
    def test_debug_flag(self, mock_run: Mock, mock_setup_logging: Mock, mock_config_loader: Mock) -> None:
        """Test that --debug switches logging to DEBUG."""
        config = ApplicationConfig()
        mock_config_loader.return_value.load_config.return_value = config
        mock_run.side_effect = lambda coro: (coro.close(), 0)[1]

        result = self.runner.invoke(cli, ["dev", "--debug"])

        assert result.exit_code == 0
        assert config.debug is True
        assert config.logging.level == "DEBUG"

    @patch('portsync.main.ConfigLoader')
    @patch('portsync.main.asyncio.run')
    def test_config_error_exits_nonzero(self, mock_run: Mock, mock_config_loader: Mock) -> None:
        """Test that configuration errors stop before anything runs."""
        mock_config_loader.return_value.load_config.side_effect = ConfigError("Configuration file not found: x.yaml")

        result = self.runner.invoke(cli, ["dev", "--config", "x.yaml"])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output
        mock_run.assert_not_called()

    @patch('portsync.main.ConfigLoader')
    @patch('portsync.main.asyncio.run')
    def test_invalid_option_value_exits_nonzero(self, mock_run: Mock, mock_config_loader: Mock) -> None:
        """Test that an invalid override is rejected."""
        mock_config_loader.return_value.load_config.return_value = ApplicationConfig()

        result = self.runner.invoke(cli, ["dev", "--poll-interval=-1"])

        assert result.exit_code == 1
        mock_run.assert_not_called()
