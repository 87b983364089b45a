# -*- coding: utf-8 -*-
"""
題庫網站建置 — 從 Notion 資料庫取得題目並生成靜態網站

用法:
  python build_site.py                                  # 使用 .env 設定，輸出到 dist/
  python build_site.py --output site --title "Immunology"
  python build_site.py --field-map field_map.example.json
"""

import sys
import argparse

from config import config as default_config, load_field_map
from errors import ConfigError, QuizBuildError, SourceError
from logger import logger
from normalize import normalize_records
from notion_source import NotionSource
import quiz_state
import site_builder

EXIT_OK = 0
EXIT_FAILED = 1


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Notion 題庫靜態網站生成器')
    parser.add_argument('--output', '-o', type=str, default=None,
                        help='輸出目錄（預設 OUTPUT_DIR 或 dist）')
    parser.add_argument('--field-map', '-f', type=str, default=None,
                        help='欄位對照表 JSON 檔')
    parser.add_argument('--title', type=str, default=None,
                        help='網站標題')
    parser.add_argument('--logo', type=str, default=None,
                        help='標誌圖檔路徑（不存在時略過）')
    return parser.parse_args(argv)


def run_build(cfg, args, source=None):
    """執行完整建置流程

    Args:
        cfg: Config 實例
        args: parse_args() 的結果
        source: 已建立的 NotionSource（測試時注入）

    Returns:
        int: 程式結束碼
    """
    output_dir = args.output or cfg.output_dir
    title = args.title or cfg.site_title
    logo_path = args.logo or cfg.logo_path

    try:
        field_map = load_field_map(args.field_map or cfg.field_map_file)
        if source is None:
            api_key, database_id = cfg.require_credentials()
            source = NotionSource(api_key, database_id,
                                  timeout=cfg.request_timeout,
                                  page_size=cfg.query_page_size,
                                  api_version=cfg.notion_version)
    except ConfigError as e:
        logger.error(f"設定錯誤: {e}")
        return EXIT_FAILED

    logger.info("從 Notion 讀取題目...")
    try:
        with source:
            records = source.fetch_all_records()
    except SourceError as e:
        logger.error(f"讀取 Notion 失敗，建置中止: {e}")
        return EXIT_FAILED

    questions = normalize_records(records, field_map)
    if not questions:
        logger.warning(
            f"沒有任何有效題目（共 {len(records)} 筆資料）。"
            "請確認 Notion 欄位名稱與欄位對照表一致；未產生任何輸出。"
        )
        return EXIT_OK

    try:
        paths = site_builder.write_site(questions, output_dir, title, logo_path)
    except QuizBuildError as e:
        logger.error(f"網站生成失敗: {e}")
        return EXIT_FAILED

    cats = quiz_state.categories(questions)
    logger.info(f"共 {len(questions)} 題, {len(cats)} 個分類, 略過 {len(records) - len(questions)} 筆")
    logger.info(f"完成！網站位於: {paths['html']}")
    return EXIT_OK


def main():
    args = parse_args()
    sys.exit(run_build(default_config, args))


if __name__ == "__main__":
    main()
