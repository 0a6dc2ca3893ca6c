"""
Pytest configuration and fixtures.
"""

import pytest
import os
import tempfile
import json


HEAD_SHA = 'a' * 40
OLD_SHA = 'b' * 40
BRANCH_SHA = 'c' * 40


@pytest.fixture
def temp_cache_file():
    """Path to a cache file that does not exist yet."""
    directory = tempfile.mkdtemp()
    path = os.path.join(directory, '.cache', 'package-update-notify.json')
    yield path
    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def write_settings(tmp_path):
    """Write a settings record to a JSON file and return its path."""
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding='utf-8')
        return str(path)
    return _write


@pytest.fixture
def global_settings():
    return {
        'packages': [
            'npm:left-pad@1.0.0',
            {'source': 'git:github.com/org/tool@main'},
            './local/extension',
        ]
    }


@pytest.fixture
def project_settings():
    return {
        'packages': [
            'npm:left-pad@2.0.0',
            'npm:@scope/pkg',
        ]
    }


@pytest.fixture
def ls_remote_result():
    """Build a mock CompletedProcess for git ls-remote."""
    from unittest.mock import Mock

    def _result(stdout='', returncode=0, stderr=''):
        result = Mock()
        result.stdout = stdout
        result.returncode = returncode
        result.stderr = stderr
        return result
    return _result
