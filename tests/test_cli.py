"""
Tests for the command-line entry point.
"""

import json

import pytest
from unittest.mock import patch

from pinwatch import cli
from pinwatch.models.check_result import CheckResult, PackageUpdate


def _result_with_update():
    return CheckResult(updates=[PackageUpdate(
        name='left-pad', current='1.0.0', latest='1.1.0', source='npm:left-pad@1.0.0'
    )])


@pytest.fixture(autouse=True)
def mock_setup_logging():
    with patch('pinwatch.cli.setup_logging') as mock_setup:
        yield mock_setup


@pytest.fixture
def settings(temp_cache_file):
    return {
        'auto_check': {'cache_file': temp_cache_file},
        'logging': {'level': 'WARNING'},
    }


class TestMain:
    """Tests for cli.main."""

    @patch('pinwatch.cli.check_package_updates')
    @patch('pinwatch.cli.load_settings')
    def test_manual_reports_updates(self, mock_settings, mock_check, settings, capsys):
        mock_settings.return_value = settings
        mock_check.return_value = _result_with_update()

        assert cli.main([]) == 0

        out = capsys.readouterr().out
        assert '1 update(s) available:' in out
        assert 'left-pad: 1.0.0 → 1.1.0' in out

    @patch('pinwatch.cli.check_package_updates')
    @patch('pinwatch.cli.load_settings')
    def test_json_output(self, mock_settings, mock_check, settings, capsys):
        mock_settings.return_value = settings
        mock_check.return_value = CheckResult(skipped_unpinned=['foo'])

        cli.main(['--json'])

        data = json.loads(capsys.readouterr().out)
        assert data['skippedUnpinned'] == ['foo']
        assert data['updates'] == []

    @patch('pinwatch.cli.check_package_updates')
    @patch('pinwatch.cli.load_settings')
    def test_auto_is_throttled(self, mock_settings, mock_check, settings, capsys):
        mock_settings.return_value = settings
        mock_check.return_value = CheckResult()

        cli.main(['--auto'])
        cli.main(['--auto'])

        assert mock_check.call_count == 1
        assert capsys.readouterr().out == ''

    @patch('pinwatch.cli.check_package_updates')
    @patch('pinwatch.cli.load_settings')
    def test_auto_notice(self, mock_settings, mock_check, settings, capsys):
        mock_settings.return_value = settings
        mock_check.return_value = _result_with_update()

        cli.main(['--auto'])

        out = capsys.readouterr().out
        assert out.startswith('Package updates available (1): left-pad 1.0.0→1.1.0.')

    @patch('pinwatch.cli.check_package_updates')
    @patch('pinwatch.cli.load_settings')
    def test_passes_paths(self, mock_settings, mock_check, settings):
        mock_settings.return_value = settings
        mock_check.return_value = CheckResult()

        cli.main(['--cwd', '/proj', '--global-settings', '/g.json'])

        kwargs = mock_check.call_args[1]
        assert kwargs['cwd'] == '/proj'
        assert kwargs['global_settings_path'] == '/g.json'
        assert kwargs['project_settings_path'] is None

    @patch('pinwatch.cli.check_package_updates')
    @patch('pinwatch.cli.load_settings')
    def test_logging_configured_from_settings(self, mock_settings, mock_check, settings,
                                              mock_setup_logging):
        mock_settings.return_value = settings
        mock_check.return_value = CheckResult()

        cli.main(['--verbose'])

        mock_setup_logging.assert_called_once_with(level='DEBUG', settings={'level': 'WARNING'})


class TestRenderReport:
    """Tests for the report text."""

    def test_up_to_date(self):
        assert cli.render_report(CheckResult()) == 'All pinned packages are up to date.'

    def test_errors(self):
        text = cli.render_report(CheckResult(errors=['Failed to check a', 'Failed to check b']))
        assert text == 'Some checks failed:\n  Failed to check a\n  Failed to check b'

    def test_unpinned_listed(self):
        text = cli.render_report(CheckResult(skipped_unpinned=['x']))
        assert text.endswith('Unpinned (not checked): x')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
