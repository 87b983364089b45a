# -*- coding: utf-8 -*-
"""
配置與日誌系統測試
"""

import json
import os
from pathlib import Path

import pytest

from config import Config, load_field_map
from errors import ConfigError
from logger import Logger
from normalize import FieldMap

PROJECT_ROOT = Path(__file__).parent.parent


def clear_env(monkeypatch, *names):
    for name in names:
        monkeypatch.setenv(name, 'x')
        monkeypatch.delenv(name)


class TestConfig:
    """環境變數與 .env 檔案"""

    def test_env_file_loaded(self, tmp_path, monkeypatch):
        clear_env(monkeypatch, 'NOTION_API_KEY', 'NOTION_DATABASE_ID')
        env = tmp_path / '.env'
        env.write_text('# comment\nNOTION_API_KEY="secret_abc"\nNOTION_DATABASE_ID=db1\nbroken line\n',
                       encoding='utf-8')

        cfg = Config(env_file=env)

        assert cfg.notion_api_key == 'secret_abc'
        assert cfg.notion_database_id == 'db1'
        assert cfg.require_credentials() == ('secret_abc', 'db1')

    def test_environment_wins_over_env_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv('NOTION_API_KEY', 'from_env')
        env = tmp_path / '.env'
        env.write_text('NOTION_API_KEY=from_file\n', encoding='utf-8')
        assert Config(env_file=env).notion_api_key == 'from_env'

    def test_missing_credentials_named(self, tmp_path, monkeypatch):
        clear_env(monkeypatch, 'NOTION_API_KEY', 'NOTION_DATABASE_ID')
        monkeypatch.setenv('NOTION_API_KEY', 'k')
        cfg = Config(env_file=tmp_path / 'none.env')
        with pytest.raises(ConfigError, match='NOTION_DATABASE_ID'):
            cfg.require_credentials()

    def test_defaults(self, tmp_path, monkeypatch):
        clear_env(monkeypatch, 'OUTPUT_DIR', 'QUERY_PAGE_SIZE', 'REQUEST_TIMEOUT', 'NOTION_VERSION',
                  'FIELD_MAP_FILE', 'LOGO_PATH')
        cfg = Config(env_file=tmp_path / 'none.env')
        assert cfg.output_dir == 'dist'
        assert cfg.query_page_size == 100
        assert cfg.request_timeout == 30
        assert cfg.notion_version == '2022-06-28'
        assert cfg.field_map_file is None
        assert cfg.logo_path == 'logo.png'

    @pytest.mark.parametrize('raw,expected', [('500', 100), ('0', 1), ('25', 25)])
    def test_query_page_size_clamped(self, tmp_path, monkeypatch, raw, expected):
        monkeypatch.setenv('QUERY_PAGE_SIZE', raw)
        assert Config(env_file=tmp_path / 'none.env').query_page_size == expected

    @pytest.mark.parametrize('name,prop', [('REQUEST_TIMEOUT', 'request_timeout'),
                                           ('QUERY_PAGE_SIZE', 'query_page_size')])
    def test_non_numeric_value_is_config_error(self, tmp_path, monkeypatch, name, prop):
        monkeypatch.setenv(name, 'thirty')
        cfg = Config(env_file=tmp_path / 'none.env')
        with pytest.raises(ConfigError, match=name):
            getattr(cfg, prop)


class TestLoadFieldMap:
    """欄位對照表載入"""

    def test_default_when_no_path(self):
        assert load_field_map(None) == FieldMap.default()

    def test_from_file(self, tmp_path):
        path = tmp_path / 'map.json'
        path.write_text(json.dumps({'category': {'property': 'Course', 'shape': 'select'}}), encoding='utf-8')
        fm = load_field_map(str(path))
        assert fm.category.property == 'Course'
        assert fm.question == FieldMap.default().question

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_field_map(tmp_path / 'missing.json')

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'map.json'
        path.write_text('{not json', encoding='utf-8')
        with pytest.raises(ConfigError):
            load_field_map(path)

    def test_example_file(self):
        fm = load_field_map(PROJECT_ROOT / 'field_map.example.json')
        assert len(fm.options) == 5
        assert [o.label for o in fm.options] == ['Α', 'Β', 'Γ', 'Δ', 'Ε']
        assert fm.question.property == 'Ερωτήσεις Πολλαπλής Επιλογής'


class TestLogger:
    """日誌系統"""

    def test_logger_creation(self, tmp_path):
        logger = Logger('test_logger', level='DEBUG', log_dir=tmp_path)
        assert logger.logger.name == 'test_logger'
        assert any(p.name.startswith('build_') for p in tmp_path.iterdir())

    def test_shared_instance(self):
        import logger as logger_module
        assert isinstance(logger_module.logger, Logger)
        assert logger_module.logger.logger.name == 'quiz_builder'

    def test_logger_levels(self, tmp_path, capsys):
        logger = Logger('level_test', level='INFO', log_dir=tmp_path)
        logger.info("測試訊息")
        logger.debug("不應顯示")
        captured = capsys.readouterr()
        assert "測試訊息" in captured.out
        assert "不應顯示" not in captured.out
