# -*- coding: utf-8 -*-
"""
配置管理模組
支援從環境變數和 .env 檔案載入設定
"""

import os
import json
from pathlib import Path

from errors import ConfigError


class Config:
    """專案配置類別"""

    def __init__(self, env_file=None):
        self.env_file = Path(env_file) if env_file else Path(__file__).parent / '.env'
        self.load_env_file()

    def load_env_file(self):
        """載入 .env 檔案（如果存在），不覆蓋既有的環境變數"""
        if self.env_file.exists():
            with open(self.env_file, 'r', encoding='utf-8') as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith('#'):
                        try:
                            key, value = line.split('=', 1)
                        except ValueError:
                            continue
                        value = value.strip().strip('"').strip("'")
                        os.environ.setdefault(key.strip(), value)

    @staticmethod
    def _int_env(name, default):
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigError(f"環境變數 {name} 必須是整數，收到 {raw!r}") from None

    @property
    def notion_api_key(self):
        """Notion 整合金鑰"""
        return os.getenv('NOTION_API_KEY', '').strip()

    @property
    def notion_database_id(self):
        """Notion 資料庫 ID"""
        return os.getenv('NOTION_DATABASE_ID', '').strip()

    @property
    def notion_version(self):
        """Notion-Version 標頭"""
        return os.getenv('NOTION_VERSION', '2022-06-28')

    @property
    def request_timeout(self):
        """請求超時時間（秒）"""
        return self._int_env('REQUEST_TIMEOUT', 30)

    @property
    def query_page_size(self):
        """每次查詢的筆數（Notion 上限 100）"""
        size = self._int_env('QUERY_PAGE_SIZE', 100)
        return max(1, min(size, 100))

    @property
    def output_dir(self):
        """輸出目錄"""
        return os.getenv('OUTPUT_DIR', 'dist')

    @property
    def site_title(self):
        """網站標題"""
        return os.getenv('SITE_TITLE', 'Question Bank')

    @property
    def logo_path(self):
        """選用的標誌圖檔"""
        return os.getenv('LOGO_PATH', 'logo.png')

    @property
    def field_map_file(self):
        """欄位對照表 JSON 檔（未設定時使用預設欄位名稱）"""
        return os.getenv('FIELD_MAP_FILE') or None

    @property
    def log_level(self):
        """日誌層級"""
        return os.getenv('LOG_LEVEL', 'INFO')

    def require_credentials(self):
        """檢查兩項必要憑證

        Returns:
            tuple: (api_key, database_id)

        Raises:
            ConfigError: 缺少任一憑證
        """
        missing = [name for name, value in (
            ('NOTION_API_KEY', self.notion_api_key),
            ('NOTION_DATABASE_ID', self.notion_database_id),
        ) if not value]
        if missing:
            raise ConfigError(f"缺少必要的環境變數: {', '.join(missing)}")
        return self.notion_api_key, self.notion_database_id


def load_field_map(path=None):
    """載入欄位對照表

    Args:
        path: JSON 檔路徑；None 時回傳預設對照表

    Returns:
        FieldMap: 欄位對照表

    Raises:
        ConfigError: 檔案不存在、JSON 無效或內容不合法
    """
    from normalize import FieldMap

    if not path:
        return FieldMap.default()

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"找不到欄位對照表: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"無法讀取欄位對照表 {path}: {e}") from e
    return FieldMap.from_dict(data)


# 全域配置實例
config = Config()
