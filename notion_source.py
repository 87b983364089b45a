# -*- coding: utf-8 -*-
"""
Notion 資料來源模組
以游標分頁方式查詢 Notion 資料庫，依序累積所有頁面。

不做重試：任何傳輸錯誤都會以 SourceError 中止整個建置。
"""

from typing import Any, Dict, List, Optional, Tuple

import requests

from errors import SourceError, describe_source_error
from logger import logger

API_BASE = 'https://api.notion.com/v1'
MAX_PAGE_SIZE = 100


class NotionSource:
    """Notion 資料庫查詢器"""

    def __init__(self, token, database_id, session=None, timeout=30,
                 page_size=MAX_PAGE_SIZE, api_version='2022-06-28'):
        """
        Args:
            token (str): Notion 整合金鑰
            database_id (str): 資料庫 ID
            session: requests.Session（測試時可注入）
            timeout (int): 請求超時（秒）
            page_size (int): 每頁筆數（1-100）
            api_version (str): Notion-Version 標頭
        """
        self.database_id = database_id
        self.timeout = timeout
        self.page_size = max(1, min(int(page_size), MAX_PAGE_SIZE))
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {token}',
            'Notion-Version': api_version,
            'Content-Type': 'application/json',
        })

    @property
    def query_url(self):
        return f'{API_BASE}/databases/{self.database_id}/query'

    def query_page(self, start_cursor: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """查詢單頁

        Args:
            start_cursor: 上一頁回傳的游標；None 表示第一頁

        Returns:
            tuple: (records, next_cursor)，next_cursor 為 None 表示已到最後一頁

        Raises:
            SourceError: 連線、超時、HTTP 錯誤或回應格式錯誤
        """
        payload = {'page_size': self.page_size}
        if start_cursor:
            payload['start_cursor'] = start_cursor

        try:
            response = self.session.post(self.query_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise SourceError(describe_source_error(e)) from e

        if not isinstance(body, dict) or not isinstance(body.get('results'), list):
            raise SourceError("回應格式錯誤: 缺少 results 陣列")

        next_cursor = body.get('next_cursor') if body.get('has_more', True) else None
        return body['results'], next_cursor or None

    def fetch_all_records(self) -> List[Dict[str, Any]]:
        """依游標逐頁查詢，直到沒有下一頁為止

        Returns:
            List[Dict]: 所有頁面，保留回傳順序
        """
        records = []
        cursor = None
        page_no = 0

        while True:
            page_no += 1
            batch, cursor = self.query_page(cursor)
            records.extend(batch)
            logger.debug(f"第 {page_no} 頁: {len(batch)} 筆 (累計 {len(records)})")
            if cursor is None:
                break

        logger.info(f"從 Notion 取得 {len(records)} 筆資料（{page_no} 頁）")
        return records

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
