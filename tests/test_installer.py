"""Tests for dev dependency installation."""

import subprocess
from unittest.mock import MagicMock, patch

from react_extras.context import PackageManager
from react_extras.installer import format_command, install_dev_dependencies


class TestInstallDevDependencies:
    @patch("react_extras.installer.subprocess.run")
    def test_runs_install_in_project(self, mock_run: MagicMock, tmp_path) -> None:
        mock_run.return_value = subprocess.CompletedProcess([], 0)

        assert install_dev_dependencies(tmp_path, PackageManager.PNPM, ["husky", "lint-staged"])
        argv = mock_run.call_args.args[0]
        assert argv == ["pnpm", "add", "-D", "husky", "lint-staged"]
        assert mock_run.call_args.kwargs["cwd"] == tmp_path

    @patch("react_extras.installer.subprocess.run")
    def test_non_zero_exit_is_failure(self, mock_run: MagicMock, tmp_path) -> None:
        mock_run.return_value = subprocess.CompletedProcess([], 1, stderr="ERR")
        assert install_dev_dependencies(tmp_path, PackageManager.NPM, ["husky"]) is False

    @patch("react_extras.installer.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_binary_is_failure(self, _mock_run: MagicMock, tmp_path) -> None:
        assert install_dev_dependencies(tmp_path, PackageManager.BUN, ["husky"]) is False

    @patch("react_extras.installer.subprocess.run")
    def test_nothing_to_install(self, mock_run: MagicMock, tmp_path) -> None:
        assert install_dev_dependencies(tmp_path, PackageManager.NPM, []) is True
        mock_run.assert_not_called()


def test_format_command_quotes_arguments() -> None:
    assert format_command(["npm", "install", "-D", "husky"]) == "npm install -D husky"
    assert format_command(["yarn", "add", "-D", "a b"]) == "yarn add -D 'a b'"
