# -*- coding: utf-8 -*-
"""
錯誤處理模組
定義建置流程的自訂例外類別與錯誤訊息輔助函數
"""

import requests


# ==================== 自訂例外類別 ====================

class QuizBuildError(Exception):
    """建置錯誤基礎類別"""
    pass


class SourceError(QuizBuildError):
    """遠端資料來源（Notion）查詢失敗，建置中止"""
    pass


class BuildError(QuizBuildError):
    """輸出檔案寫入或驗證失敗"""
    pass


class ConfigError(QuizBuildError):
    """配置錯誤（缺少憑證、欄位對照表無效）"""
    pass


# ==================== 錯誤處理輔助函數 ====================

def _notion_message(response):
    """從 Notion 錯誤回應取出 message 欄位"""
    try:
        body = response.json()
    except ValueError:
        return ''
    if isinstance(body, dict):
        return str(body.get('message', ''))
    return ''


def describe_source_error(error: Exception) -> str:
    """統一描述資料來源錯誤

    Args:
        error: 例外物件

    Returns:
        str: 單行錯誤訊息
    """
    if isinstance(error, requests.exceptions.Timeout):
        return "請求超時: Notion API 無回應"
    elif isinstance(error, requests.exceptions.ConnectionError):
        return "連線錯誤: 無法連接至 Notion API"
    elif isinstance(error, requests.exceptions.HTTPError):
        response = error.response
        if response is None:
            return f"HTTP 錯誤: {error}"
        message = _notion_message(response)
        detail = f" - {message}" if message else ''
        return f"HTTP 錯誤 {response.status_code}{detail}"
    elif isinstance(error, ValueError):
        return f"回應格式錯誤: {error}"
    else:
        return f"未知錯誤: {type(error).__name__} - {error}"
