# -*- coding: utf-8 -*-
"""
前端狀態機（Python 版）
與產生的 script.js 採用相同語意：分類篩選、搜尋、分頁、標記、隨機測驗、顯示答案。

所有更新函數皆為純函數，回傳 Update(state, render, question_id)，
render 列出需要重新繪製的區塊，方便在沒有瀏覽器的環境下測試。
"""

import json
import math
import random
from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, List, Optional, Tuple

from normalize import Question

FLAGGED = '__flagged__'
FLAGS_KEY = 'quiz-flagged-ids'
THEME_KEY = 'quiz-dark'
PAGE_SIZES = (10, 20, 50)
DEFAULT_PAGE_SIZE = 20

# 需重新繪製的區塊
RENDER_LIST = 'list'
RENDER_PAGINATION = 'pagination'
RENDER_FLAG = 'flag'
RENDER_REVEAL = 'reveal'
RENDER_FILTERS = 'filters'


# ==================== 本地儲存 ====================

class KeyValueStore:
    """鍵值儲存介面（瀏覽器端對應 localStorage）"""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def clear(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """記憶體版儲存，用於測試"""

    def __init__(self, initial=None):
        self._data = dict(initial or {})

    def get(self, key):
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value

    def clear(self, key):
        self._data.pop(key, None)


def load_flags(store: KeyValueStore) -> FrozenSet[str]:
    """讀取已標記的題目 id；資料損壞時視為空集合"""
    raw = store.get(FLAGS_KEY)
    if not raw:
        return frozenset()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return frozenset()
    if not isinstance(data, list):
        return frozenset()
    return frozenset(i for i in data if isinstance(i, str))


def save_flags(store: KeyValueStore, ids: Iterable[str]) -> None:
    store.set(FLAGS_KEY, json.dumps(sorted(ids), ensure_ascii=False))


# ==================== 狀態 ====================

@dataclass(frozen=True)
class ClientState:
    """單次頁面載入的前端狀態"""
    all_questions: Tuple[Question, ...]
    active_filter: Optional[str] = None
    search_term: str = ''
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    flagged_ids: FrozenSet[str] = frozenset()
    quiz_mode: bool = False
    quiz_size: int = 0
    quiz_sample: Tuple[Question, ...] = ()
    revealed_ids: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class Update:
    """狀態轉移結果"""
    state: ClientState
    render: Tuple[str, ...] = ()
    question_id: Optional[str] = None


def initial_state(questions, store: Optional[KeyValueStore] = None) -> ClientState:
    flags = load_flags(store) if store is not None else frozenset()
    return ClientState(all_questions=tuple(questions), flagged_ids=flags)


def categories(questions) -> List[str]:
    """不重複的分類，依字母排序（不分大小寫）"""
    return sorted({q.category for q in questions}, key=lambda c: (c.casefold(), c))


# ==================== 衍生檢視 ====================

def matches_search(question: Question, term: str) -> bool:
    """題幹或任一選項包含搜尋字串（不分大小寫）"""
    needle = term.lower()
    if needle in (question.question or '').lower():
        return True
    return any(needle in opt.lower() for opt in question.options)


def _source_questions(state: ClientState) -> Tuple[Question, ...]:
    if state.quiz_mode:
        return state.quiz_sample
    if state.active_filter == FLAGGED:
        return tuple(q for q in state.all_questions if q.id in state.flagged_ids)
    if state.active_filter:
        return tuple(q for q in state.all_questions if q.category == state.active_filter)
    if state.search_term.strip():
        return state.all_questions
    return ()


def filtered_questions(state: ClientState) -> Tuple[Question, ...]:
    source = _source_questions(state)
    term = state.search_term.strip()
    if not term:
        return source
    return tuple(q for q in source if matches_search(q, term))


def page_count(state: ClientState) -> int:
    return math.ceil(len(filtered_questions(state)) / state.page_size)


def page_items(state: ClientState) -> Tuple[Question, ...]:
    items = filtered_questions(state)
    start = (state.current_page - 1) * state.page_size
    return items[start:start + state.page_size]


def can_go_prev(state: ClientState) -> bool:
    return state.current_page > 1


def can_go_next(state: ClientState) -> bool:
    return state.current_page < page_count(state)


def _positive_int(value) -> Optional[int]:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number >= 1 else None


def _clamp_page(state: ClientState, page: int) -> int:
    return max(1, min(page, max(1, page_count(state))))


def _full(state):
    return Update(state, (RENDER_LIST, RENDER_PAGINATION))


# ==================== 狀態轉移 ====================

def select_category(state: ClientState, category: Optional[str]) -> Update:
    """切換分類（或標記檢視），離開測驗模式"""
    new = replace(state, active_filter=category or None, current_page=1,
                  quiz_mode=False, quiz_size=0, quiz_sample=())
    return Update(new, (RENDER_LIST, RENDER_PAGINATION, RENDER_FILTERS))


def set_search(state: ClientState, term: str) -> Update:
    return _full(replace(state, search_term=term or '', current_page=1))


def set_page_size(state: ClientState, size: int) -> Update:
    """非正整數的筆數不改變狀態"""
    size = _positive_int(size)
    if size is None:
        return Update(state)
    return _full(replace(state, page_size=size, current_page=1))


def go_to_page(state: ClientState, page: int) -> Update:
    page = _clamp_page(state, page)
    if page == state.current_page:
        return Update(state)
    return _full(replace(state, current_page=page))


def next_page(state: ClientState) -> Update:
    return go_to_page(state, state.current_page + 1)


def prev_page(state: ClientState) -> Update:
    return go_to_page(state, state.current_page - 1)


def toggle_flag(state: ClientState, question_id: str, store: KeyValueStore) -> Update:
    """標記 / 取消標記，並立即寫入儲存"""
    if question_id in state.flagged_ids:
        flags = state.flagged_ids - {question_id}
    else:
        flags = state.flagged_ids | {question_id}
    save_flags(store, flags)
    new = replace(state, flagged_ids=flags)

    if state.active_filter == FLAGGED and not state.quiz_mode:
        new = replace(new, current_page=_clamp_page(new, new.current_page))
        return Update(new, (RENDER_LIST, RENDER_PAGINATION), question_id)
    return Update(new, (RENDER_FLAG,), question_id)


def shuffled(items, rng=None) -> list:
    """Fisher-Yates 洗牌，回傳新串列"""
    rng = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def start_quiz(state: ClientState, category: str, count: int, rng=None) -> Update:
    """從指定分類隨機抽取 min(count, n) 題（不重複）

    未選擇具體分類或題數不是正整數時不改變狀態。
    """
    count = _positive_int(count)
    if not category or category == FLAGGED or count is None:
        return Update(state)

    pool = [q for q in state.all_questions if q.category == category]
    sample = tuple(shuffled(pool, rng)[:count])
    new = replace(state, active_filter=category, search_term='', current_page=1,
                  quiz_mode=True, quiz_size=len(sample), quiz_sample=sample,
                  revealed_ids=frozenset())
    return Update(new, (RENDER_LIST, RENDER_PAGINATION, RENDER_FILTERS))


def exit_quiz(state: ClientState) -> Update:
    return select_category(state, state.active_filter)


def toggle_reveal(state: ClientState, question_id: str) -> Update:
    if question_id in state.revealed_ids:
        revealed = state.revealed_ids - {question_id}
    else:
        revealed = state.revealed_ids | {question_id}
    return Update(replace(state, revealed_ids=revealed), (RENDER_REVEAL,), question_id)


def reveal_all(state: ClientState, on: bool) -> Update:
    """將目前頁面上所有題目的顯示狀態一次設為 on / off"""
    visible = {q.id for q in page_items(state)}
    if on:
        revealed = state.revealed_ids | visible
    else:
        revealed = state.revealed_ids - visible
    return Update(replace(state, revealed_ids=revealed), (RENDER_REVEAL,))
