# -*- coding: utf-8 -*-
"""
建置流程整合測試（以假的資料來源取代 Notion）
"""

import json

import build_site
from config import Config
from errors import SourceError
from notion_fixtures import make_record


class FakeSource:
    """模擬 NotionSource 的最小介面"""

    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.closed = False

    def fetch_all_records(self):
        if self.error:
            raise self.error
        return list(self.records)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        return False


def clear_env(monkeypatch, *names):
    for name in names:
        monkeypatch.setenv(name, 'x')
        monkeypatch.delenv(name)


class TestParseArgs:
    """命令列參數"""

    def test_defaults(self):
        args = build_site.parse_args([])
        assert args.output is None
        assert args.field_map is None
        assert args.title is None
        assert args.logo is None

    def test_flags(self):
        args = build_site.parse_args(['-o', 'site', '-f', 'map.json', '--title', 'Bio', '--logo', 'l.png'])
        assert (args.output, args.field_map, args.title, args.logo) == ('site', 'map.json', 'Bio', 'l.png')


class TestRunBuild:
    """完整流程"""

    def setup_method(self):
        self.records = [
            make_record('a', question='Q1', options=['one'], answers=('A',), category='Bio'),
            make_record('b', options=['x']),
            make_record('c', question='Q3'),
        ]

    def make_config(self, tmp_path, monkeypatch):
        clear_env(monkeypatch, 'NOTION_API_KEY', 'NOTION_DATABASE_ID', 'FIELD_MAP_FILE',
                  'OUTPUT_DIR', 'SITE_TITLE', 'LOGO_PATH')
        return Config(env_file=tmp_path / 'missing.env')

    def make_args(self, tmp_path, *extra):
        return build_site.parse_args(['--output', str(tmp_path / 'dist'),
                                      '--logo', str(tmp_path / 'logo.png'), *extra])

    def test_successful_build(self, tmp_path, monkeypatch):
        cfg = self.make_config(tmp_path, monkeypatch)
        source = FakeSource(self.records)

        code = build_site.run_build(cfg, self.make_args(tmp_path, '--title', 'Immunology'), source=source)

        assert code == build_site.EXIT_OK
        assert source.closed
        page = (tmp_path / 'dist' / 'index.html').read_text(encoding='utf-8')
        assert '<title>Immunology</title>' in page
        assert (tmp_path / 'dist' / 'style.css').exists()
        assert (tmp_path / 'dist' / 'script.js').exists()

    def test_only_valid_questions_embedded(self, tmp_path, monkeypatch):
        cfg = self.make_config(tmp_path, monkeypatch)
        build_site.run_build(cfg, self.make_args(tmp_path), source=FakeSource(self.records))

        import site_builder
        page = (tmp_path / 'dist' / 'index.html').read_text(encoding='utf-8')
        payload = site_builder.extract_payload(page)
        assert [q['id'] for q in payload] == ['a']
        assert payload[0]['correctAnswers'] == ['A']

    def test_transport_failure_writes_nothing(self, tmp_path, monkeypatch, caplog):
        cfg = self.make_config(tmp_path, monkeypatch)
        source = FakeSource(error=SourceError('請求超時: Notion API 無回應'))

        code = build_site.run_build(cfg, self.make_args(tmp_path), source=source)

        assert code == build_site.EXIT_FAILED
        assert not (tmp_path / 'dist').exists()
        assert '請求超時' in caplog.text

    def test_empty_result_is_warning_without_output(self, tmp_path, monkeypatch, caplog):
        cfg = self.make_config(tmp_path, monkeypatch)
        source = FakeSource([make_record('b'), make_record('c', question='Q3')])

        with caplog.at_level('WARNING'):
            code = build_site.run_build(cfg, self.make_args(tmp_path), source=source)

        assert code == build_site.EXIT_OK
        assert not (tmp_path / 'dist').exists()
        assert any(r.levelname == 'WARNING' for r in caplog.records)

    def test_missing_credentials(self, tmp_path, monkeypatch):
        cfg = self.make_config(tmp_path, monkeypatch)
        code = build_site.run_build(cfg, self.make_args(tmp_path))
        assert code == build_site.EXIT_FAILED
        assert not (tmp_path / 'dist').exists()

    def test_custom_field_map(self, tmp_path, monkeypatch):
        cfg = self.make_config(tmp_path, monkeypatch)
        field_map = tmp_path / 'map.json'
        field_map.write_text(json.dumps({'question': {'property': 'Prompt', 'shape': 'rich_text'}}),
                             encoding='utf-8')
        record = make_record('z', options=['opt'])
        record['properties']['Prompt'] = {'type': 'rich_text', 'rich_text': [{'plain_text': 'Renamed?'}]}

        code = build_site.run_build(cfg, self.make_args(tmp_path, '--field-map', str(field_map)),
                                    source=FakeSource([record]))

        assert code == build_site.EXIT_OK
        assert 'Renamed?' in (tmp_path / 'dist' / 'index.html').read_text(encoding='utf-8')

    def test_bad_field_map_fails(self, tmp_path, monkeypatch):
        cfg = self.make_config(tmp_path, monkeypatch)
        code = build_site.run_build(cfg, self.make_args(tmp_path, '--field-map', str(tmp_path / 'nope.json')),
                                    source=FakeSource(self.records))
        assert code == build_site.EXIT_FAILED

    def test_output_dir_from_environment(self, tmp_path, monkeypatch):
        cfg = self.make_config(tmp_path, monkeypatch)
        monkeypatch.setenv('OUTPUT_DIR', str(tmp_path / 'from_env'))
        args = build_site.parse_args(['--logo', str(tmp_path / 'logo.png')])

        code = build_site.run_build(cfg, args, source=FakeSource(self.records))

        assert code == build_site.EXIT_OK
        assert (tmp_path / 'from_env' / 'index.html').exists()

    def test_non_numeric_timeout_fails_cleanly(self, tmp_path, monkeypatch, caplog):
        cfg = self.make_config(tmp_path, monkeypatch)
        monkeypatch.setenv('NOTION_API_KEY', 'secret_abc')
        monkeypatch.setenv('NOTION_DATABASE_ID', 'db1')
        monkeypatch.setenv('REQUEST_TIMEOUT', 'soon')

        code = build_site.run_build(cfg, self.make_args(tmp_path))

        assert code == build_site.EXIT_FAILED
        assert 'REQUEST_TIMEOUT' in caplog.text
        assert not (tmp_path / 'dist').exists()
