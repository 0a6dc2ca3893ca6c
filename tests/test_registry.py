"""
Tests for settings loading and merging.
"""

import os

import pytest
from unittest.mock import patch

from pinwatch.core.registry import (
    SettingsRegistry,
    extract_packages,
    merge_packages,
    load_config,
    load_settings,
)
from pinwatch.models.package_spec import NpmSpec, GitSpec


class TestExtractPackages:
    """Tests for extract_packages."""

    def test_strings_and_objects(self, global_settings):
        specs = extract_packages(global_settings)

        assert len(specs) == 2
        assert isinstance(specs[0], NpmSpec)
        assert isinstance(specs[1], GitSpec)
        assert specs[1].url == 'https://github.com/org/tool'
        assert specs[1].ref == 'main'

    def test_skips_bad_entries(self):
        settings = {'packages': [None, 42, {}, {'source': None}, 'plain-name', '../up']}
        assert extract_packages(settings) == []

    def test_no_packages(self):
        assert extract_packages({}) == []
        assert extract_packages({'packages': None}) == []


class TestMergePackages:
    """Tests for merge_packages."""

    def test_project_wins(self):
        merged = merge_packages(
            [NpmSpec(name='foo', version='1.0')],
            [NpmSpec(name='foo', version='2.0')],
        )
        assert len(merged) == 1
        assert merged[0].name == 'foo'
        assert merged[0].version == '2.0'

    def test_git_keyed_by_normalized_url(self):
        a = GitSpec(url='https://github.com/o/r', ref='v1', display_name='o/r')
        b = GitSpec(url='https://github.com/o/r', ref=None, display_name='o/r')
        merged = merge_packages([a], [b])
        assert merged == [b]

    def test_npm_and_git_do_not_collide(self):
        npm = NpmSpec(name='o/r')
        git = GitSpec(url='o/r')
        assert merge_packages([npm], [git]) == [npm, git]

    def test_order_and_duplicates(self):
        merged = merge_packages(
            [NpmSpec(name='a'), NpmSpec(name='b'), NpmSpec(name='a', version='1')],
            [NpmSpec(name='c')],
        )
        assert [s.name for s in merged] == ['a', 'b', 'c']
        assert merged[0].version == '1'


class TestLoadConfig:
    """Tests for settings file loading."""

    def test_json(self, write_settings):
        path = write_settings('settings.json', {'packages': ['npm:x']})
        assert load_config(path) == {'packages': ['npm:x']}

    def test_yaml(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text("packages:\n  - npm:x@1.0.0\n", encoding='utf-8')
        assert load_config(str(path)) == {'packages': ['npm:x@1.0.0']}

    def test_missing(self, tmp_path):
        assert load_config(str(tmp_path / 'nope.json')) == {}

    def test_invalid(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text("{not json", encoding='utf-8')
        assert load_config(str(path)) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text("- a\n- b\n", encoding='utf-8')
        assert load_config(str(path)) == {}


class TestLoadSettings:
    """Tests for tool settings."""

    @patch.dict(os.environ, {}, clear=True)
    @patch('pinwatch.core.registry.load_dotenv')
    def test_defaults(self, mock_dotenv):
        settings = load_settings()
        assert settings['npm']['registry_url'] == 'https://registry.npmjs.org'
        assert settings['git']['timeout'] == 10

    @patch.dict(os.environ, {}, clear=True)
    @patch('pinwatch.core.registry.load_dotenv')
    def test_yaml_overrides_section_keys(self, mock_dotenv, tmp_path):
        path = tmp_path / 'pinwatch.yaml'
        path.write_text("git:\n  timeout: 3\n", encoding='utf-8')

        settings = load_settings(str(path))

        assert settings['git']['timeout'] == 3
        assert settings['git']['executable'] == 'git'

    @patch.dict(os.environ, {'PINWATCH_NPM_REGISTRY': 'https://npm.internal'}, clear=True)
    @patch('pinwatch.core.registry.load_dotenv')
    def test_env_override(self, mock_dotenv):
        assert load_settings()['npm']['registry_url'] == 'https://npm.internal'


class TestSettingsRegistry:
    """Tests for SettingsRegistry."""

    def test_merged_packages(self, write_settings, global_settings, project_settings):
        registry = SettingsRegistry(
            write_settings('global.json', global_settings),
            write_settings('project.json', project_settings),
        )

        packages = registry.get_packages()

        assert [p.key for p in packages] == [
            'npm:left-pad',
            'git:https://github.com/org/tool',
            'npm:@scope/pkg',
        ]
        assert packages[0].version == '2.0.0'

    def test_project_path_from_cwd(self, tmp_path):
        pi_dir = tmp_path / '.pi'
        pi_dir.mkdir()
        (pi_dir / 'settings.json').write_text('{"packages": ["npm:x@1"]}', encoding='utf-8')

        registry = SettingsRegistry(str(tmp_path / 'global.json'), cwd=str(tmp_path))

        assert registry.get_project_packages() == [NpmSpec(name='x', version='1', source='npm:x@1')]
        assert registry.get_global_packages() == []


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
