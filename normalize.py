# -*- coding: utf-8 -*-
"""
題目正規化模組
將 Notion 頁面的各種屬性型態（title / rich_text / select / multi_select）
依欄位對照表轉換為扁平的 Question 物件。

欄位缺漏或型態不符時一律退化為「空值」，不拋出例外。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from errors import ConfigError
from logger import logger

UNCATEGORIZED = 'Uncategorized'
MAX_OPTION_SLOTS = 6

SHAPES = ('title', 'rich_text', 'select', 'multi_select')
TEXT_SHAPES = ('title', 'rich_text')


# ==================== 資料模型 ====================

@dataclass(frozen=True)
class Question:
    """正規化後的題目"""
    id: str
    question: Optional[str]
    options: Tuple[str, ...] = ()
    correct_answers: Tuple[str, ...] = ()
    justification: Optional[str] = None
    category: str = UNCATEGORIZED

    def is_valid(self) -> bool:
        """題幹與選項皆非空才保留"""
        return bool(self.question) and len(self.options) > 0

    def to_dict(self) -> Dict[str, Any]:
        """序列化為前端使用的欄位名稱"""
        return {
            'id': self.id,
            'question': self.question,
            'options': list(self.options),
            'correctAnswers': list(self.correct_answers),
            'justification': self.justification,
            'category': self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Question':
        return cls(
            id=data['id'],
            question=data.get('question'),
            options=tuple(data.get('options') or ()),
            correct_answers=tuple(data.get('correctAnswers') or ()),
            justification=data.get('justification'),
            category=data.get('category') or UNCATEGORIZED,
        )


# ==================== 欄位對照表 ====================

@dataclass(frozen=True)
class FieldRule:
    """單一欄位：Notion 屬性名稱 + 預期型態"""
    property: str
    shape: str
    label: Optional[str] = None

    @classmethod
    def from_dict(cls, data, default_shape):
        if isinstance(data, str):
            data = {'property': data}
        if not isinstance(data, dict) or not data.get('property'):
            raise ConfigError(f"欄位設定缺少 property: {data!r}")
        shape = data.get('shape', default_shape)
        if shape not in SHAPES:
            raise ConfigError(f"不支援的欄位型態 {shape!r}（可用: {', '.join(SHAPES)}）")
        label = data.get('label')
        return cls(property=str(data['property']), shape=shape,
                   label=str(label) if label is not None else None)


@dataclass(frozen=True)
class FieldMap:
    """Notion 屬性名稱與題目欄位的對照"""
    question: FieldRule
    options: Tuple[FieldRule, ...]
    correct_answers: FieldRule
    justification: FieldRule
    category: FieldRule
    label_options: bool = True

    @classmethod
    def default(cls) -> 'FieldMap':
        labels = 'ABCDEF'
        return cls(
            question=FieldRule('Question', 'title'),
            options=tuple(FieldRule(f'Option {c}', 'rich_text', c) for c in labels),
            correct_answers=FieldRule('Correct Answers', 'multi_select'),
            justification=FieldRule('Justification', 'rich_text'),
            category=FieldRule('Category', 'select'),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FieldMap':
        """從 JSON 設定建立對照表，未指定的欄位沿用預設值"""
        if not isinstance(data, dict):
            raise ConfigError("欄位對照表必須是 JSON 物件")
        base = cls.default()

        def rule(key, fallback):
            if key not in data:
                return fallback
            return FieldRule.from_dict(data[key], fallback.shape)

        options = base.options
        if 'options' in data:
            raw_options = data['options']
            if not isinstance(raw_options, list) or not raw_options:
                raise ConfigError("options 必須是非空陣列")
            if len(raw_options) > MAX_OPTION_SLOTS:
                raise ConfigError(f"選項欄位最多 {MAX_OPTION_SLOTS} 個，收到 {len(raw_options)} 個")
            options = tuple(FieldRule.from_dict(o, 'rich_text') for o in raw_options)

        label_options = data.get('label_options', True)
        if not isinstance(label_options, bool):
            raise ConfigError(f"label_options 必須是 true 或 false，收到 {label_options!r}")

        # 未指定 label 的選項依序補上 A-F
        options = tuple(
            o if o.label else FieldRule(o.property, o.shape, 'ABCDEF'[i])
            for i, o in enumerate(options)
        )

        return cls(
            question=rule('question', base.question),
            options=options,
            correct_answers=rule('correct_answers', base.correct_answers),
            justification=rule('justification', base.justification),
            category=rule('category', base.category),
            label_options=label_options,
        )


# ==================== 屬性讀取表 ====================

def _rich_text_segments(value) -> List[str]:
    if not isinstance(value, list):
        return []
    parts = []
    for segment in value:
        if isinstance(segment, dict):
            text = segment.get('plain_text')
            if text is None:
                text = (segment.get('text') or {}).get('content')
            if isinstance(text, str):
                parts.append(text)
    return parts


def _select_names(value) -> List[str]:
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        return []
    return [o['name'] for o in value
            if isinstance(o, dict) and isinstance(o.get('name'), str)]


SHAPE_READERS = {
    'title': _rich_text_segments,
    'rich_text': _rich_text_segments,
    'select': _select_names,
    'multi_select': _select_names,
}


def _segments(prop, shape) -> List[str]:
    """依型態讀取屬性；缺漏或型態不符回傳空串列"""
    if not isinstance(prop, dict):
        return []
    declared = prop.get('type')
    if declared is not None and declared != shape:
        return []
    return SHAPE_READERS[shape](prop.get(shape))


def read_text(prop, shape) -> Optional[str]:
    """文字欄位：串接所有片段"""
    segments = _segments(prop, shape)
    if shape in TEXT_SHAPES:
        text = ''.join(segments).strip()
    else:
        text = ', '.join(s.strip() for s in segments if s.strip())
    return text or None


def read_labels(prop, shape) -> Tuple[str, ...]:
    """標籤欄位：去重並保留順序；文字型態以逗號分隔"""
    segments = _segments(prop, shape)
    if shape in TEXT_SHAPES:
        segments = ''.join(segments).split(',')
    labels = []
    for s in segments:
        s = s.strip()
        if s and s not in labels:
            labels.append(s)
    return tuple(labels)


# ==================== 正規化 ====================

def normalize_record(record, field_map: FieldMap) -> Question:
    """將單筆 Notion 頁面轉為 Question（可能無效）"""
    if not isinstance(record, dict):
        record = {}
    props = record.get('properties')
    if not isinstance(props, dict):
        props = {}

    def text(rule):
        return read_text(props.get(rule.property), rule.shape)

    options = []
    for rule in field_map.options:
        value = text(rule)
        if not value:
            continue
        if field_map.label_options and rule.label:
            value = f"{rule.label}. {value}"
        options.append(value)

    cf = field_map.correct_answers
    return Question(
        id=str(record.get('id') or ''),
        question=text(field_map.question),
        options=tuple(options),
        correct_answers=read_labels(props.get(cf.property), cf.shape),
        justification=text(field_map.justification),
        category=text(field_map.category) or UNCATEGORIZED,
    )


def normalize_records(records, field_map: FieldMap) -> List[Question]:
    """正規化並過濾無效題目，保留原始順序"""
    questions = []
    dropped = 0
    for record in records:
        q = normalize_record(record, field_map)
        if q.is_valid():
            questions.append(q)
        else:
            dropped += 1
            logger.debug(f"略過無效題目: {q.id or '(無 id)'}")

    logger.info(f"正規化完成: {len(questions)} 題有效, {dropped} 筆略過")
    return questions
