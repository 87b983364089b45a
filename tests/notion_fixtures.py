# -*- coding: utf-8 -*-
"""
測試用 Notion 頁面產生器（依預設欄位對照表的屬性名稱）
"""

from normalize import Question

SLOTS = 'ABCDEF'


def title(text):
    return {'type': 'title', 'title': [{'plain_text': text}] if text else []}


def rich(text):
    return {'type': 'rich_text', 'rich_text': [{'plain_text': text}] if text else []}


def select(name):
    return {'type': 'select', 'select': {'name': name} if name else None}


def multi(*names):
    return {'type': 'multi_select', 'multi_select': [{'name': n} for n in names]}


def make_record(page_id, question=None, options=(), answers=(), justification=None, category=None):
    """options 依欄位順序排列，None 代表空欄位"""
    props = {'Question': title(question)}
    for label, text in zip(SLOTS, options):
        props[f'Option {label}'] = rich(text)
    props['Correct Answers'] = multi(*answers)
    props['Justification'] = rich(justification)
    props['Category'] = select(category)
    return {'object': 'page', 'id': page_id, 'properties': props}


def make_questions(count, category='Biology', prefix='q'):
    return [
        Question(
            id=f'{prefix}{i}',
            question=f'{category} question {i}',
            options=(f'A. option {i}', 'B. other'),
            correct_answers=('A',),
            justification=None,
            category=category,
        )
        for i in range(1, count + 1)
    ]
