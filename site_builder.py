# -*- coding: utf-8 -*-
"""
網站生成器 — 將正規化後的題目輸出為靜態題庫網站
產出 index.html（內嵌題目 JSON）、style.css、script.js，
以及選用的標誌圖檔。
"""

import os
import json
import shutil
import html as html_module
from pathlib import Path

from bs4 import BeautifulSoup

import quiz_state
from errors import BuildError
from logger import logger

PAYLOAD_ID = 'questions-data'


def escape_html(text):
    """HTML 跳脫"""
    return html_module.escape(str(text))


def serialize_questions(questions):
    """將題目序列化為可安全內嵌於 <script> 的 JSON

    所有欄位（含空陣列與 null）都會保留；< > & 以 \\u 形式跳脫，
    避免內容提前結束 script 區塊。
    """
    payload = json.dumps([q.to_dict() for q in questions], ensure_ascii=False,
                         separators=(',', ':'))
    return (payload.replace('&', '\\u0026')
                   .replace('<', '\\u003c')
                   .replace('>', '\\u003e'))


def extract_payload(page_html):
    """從頁面取出內嵌的題目 JSON"""
    soup = BeautifulSoup(page_html, 'html.parser')
    tag = soup.find('script', id=PAYLOAD_ID)
    if tag is None:
        raise BuildError(f"頁面缺少 #{PAYLOAD_ID} 資料區塊")
    try:
        return json.loads(tag.string or '')
    except ValueError as e:
        raise BuildError(f"內嵌題目 JSON 無法解析: {e}") from e


def verify_payload(page_html, questions):
    """確認內嵌資料與原題目完全一致"""
    expected = [q.to_dict() for q in questions]
    actual = extract_payload(page_html)
    if actual != expected:
        raise BuildError("內嵌題目資料與原始題目不一致")


def generate_shared_css():
    """生成共用 CSS"""
    return """:root {
  --primary: #2563eb;
  --primary-light: #3b82f6;
  --accent: #6366f1;
  --bg: #f8fafc;
  --card-bg: #ffffff;
  --border: #e2e8f0;
  --text: #1e293b;
  --text-light: #64748b;
  --success: #10b981;
  --warning: #f59e0b;
  --shadow-sm: 0 1px 2px rgba(0,0,0,0.05);
  --shadow-md: 0 4px 6px -1px rgba(0,0,0,0.07), 0 2px 4px -2px rgba(0,0,0,0.05);
  --radius: 12px;
}
html.dark { --bg: #191919; --card-bg: #2d2d2d; --border: #3a3a3a; --text: #e3e3e3; --text-light: #a3a3a3; }
* { margin: 0; padding: 0; box-sizing: border-box; }
a, button, input, select { touch-action: manipulation; -webkit-tap-highlight-color: transparent; }
body { font-family: 'Roboto', -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif; background: var(--bg); color: var(--text); line-height: 1.6; -webkit-font-smoothing: antialiased; }
.container { max-width: 860px; margin: 0 auto; padding: 2rem 1.25rem; }
/* === Header === */
.site-header { display: flex; align-items: center; gap: 1rem; margin-bottom: 1.5rem; }
.site-logo { height: 48px; width: auto; }
.page-title { font-size: 1.6rem; font-weight: 700; color: var(--primary); flex: 1; }
.page-subtitle { color: var(--text-light); font-size: 0.9rem; }
.dark-toggle { width: 44px; height: 44px; border-radius: 50%; border: 1px solid var(--border); background: var(--card-bg); color: var(--text); cursor: pointer; font-size: 1.1rem; }
/* === Toolbar === */
.toolbar { display: flex; gap: 0.5rem; flex-wrap: wrap; align-items: center; background: var(--card-bg); border: 1px solid var(--border); border-radius: var(--radius); padding: 0.75rem; margin-bottom: 1rem; box-shadow: var(--shadow-sm); }
.toolbar select, .toolbar input { padding: 0.5rem 0.75rem; border: 1.5px solid var(--border); border-radius: 8px; background: var(--card-bg); color: var(--text); font-family: inherit; font-size: 0.9rem; min-height: 44px; }
.toolbar .search-input { flex: 1; min-width: 200px; }
.toolbar .quiz-count { width: 5.5rem; }
.toolbar-btn { padding: 0.5rem 1rem; border: 1.5px solid var(--border); border-radius: 8px; background: transparent; color: var(--text); font-size: 0.85rem; min-height: 44px; font-family: inherit; cursor: pointer; transition: all 0.2s cubic-bezier(0.4, 0, 0.2, 1); }
.toolbar-btn:hover:not(:disabled) { border-color: var(--primary); color: var(--primary); }
.toolbar-btn:disabled { opacity: 0.4; cursor: not-allowed; }
.toolbar-btn.hidden { display: none; }
.status-text { font-size: 0.82rem; color: var(--text-light); margin-bottom: 1rem; min-height: 1.2em; }
/* === Question Card === */
.initial-prompt { text-align: center; color: var(--text-light); padding: 3rem 1rem; }
.question-card { background: var(--card-bg); border: 1px solid var(--border); border-radius: var(--radius); padding: 1.25rem 1.5rem; margin-bottom: 1rem; box-shadow: var(--shadow-sm); }
.question-head { display: flex; align-items: flex-start; gap: 0.75rem; }
.q-number { display: inline-flex; align-items: center; justify-content: center; min-width: 28px; height: 28px; border-radius: 50%; background: var(--primary); color: #fff; font-size: 0.78rem; font-weight: 700; flex-shrink: 0; }
.question-text { flex: 1; font-size: 1.02rem; font-weight: 500; overflow-wrap: break-word; }
.q-category { display: inline-block; font-size: 0.75rem; padding: 0.1rem 0.5rem; border-radius: 6px; background: var(--bg); color: var(--text-light); margin-top: 0.25rem; }
.flag-btn { background: none; border: none; cursor: pointer; font-size: 1.2rem; opacity: 0.35; min-width: 44px; min-height: 44px; color: var(--text); transition: opacity 0.2s; }
.flag-btn:hover { opacity: 0.7; }
.flag-btn.active { opacity: 1; color: var(--warning); }
.options-list { list-style: none; margin: 0.75rem 0 0.75rem 2.5rem; }
.options-list li { margin-bottom: 0.4rem; overflow-wrap: break-word; }
.reveal-btn { padding: 0.35rem 0.9rem; border: 1.5px solid var(--primary); border-radius: 8px; background: transparent; color: var(--primary); cursor: pointer; font-family: inherit; font-size: 0.85rem; margin-left: 2.5rem; }
.answer-reveal { display: none; margin: 0.75rem 0 0 2.5rem; padding: 0.75rem 1rem; border-left: 3px solid var(--success); background: var(--bg); border-radius: 0 8px 8px 0; }
.question-card.revealed .answer-reveal { display: block; }
.answer-label { font-weight: 700; }
.justification { margin-top: 0.4rem; color: var(--text-light); white-space: pre-wrap; }
/* === Pagination === */
.pagination { display: flex; justify-content: center; align-items: center; gap: 1rem; margin: 1.5rem 0; }
.pagination button { padding: 0.5rem 1.1rem; border: 1.5px solid var(--border); border-radius: 8px; background: var(--card-bg); color: var(--text); cursor: pointer; min-height: 44px; font-family: inherit; }
.pagination button:disabled { opacity: 0.4; cursor: not-allowed; }
.page-info { font-size: 0.9rem; color: var(--text-light); }
/* === A11y === */
:focus-visible { outline: 3px solid var(--accent); outline-offset: 2px; border-radius: 4px; }
@media (max-width: 600px) { .container { padding: 1rem 0.75rem; } .options-list, .answer-reveal { margin-left: 0; } .reveal-btn { margin-left: 0; } }
@media print { .toolbar, .pagination, .dark-toggle, .flag-btn, .reveal-btn { display: none !important; } .answer-reveal { display: block !important; } body { background: white !important; color: #000 !important; } .question-card { break-inside: avoid; } }
"""


def _js_constants():
    """由 quiz_state 取得前後端共用的常數"""
    values = {
        'FLAGGED': quiz_state.FLAGGED,
        'FLAGS_KEY': quiz_state.FLAGS_KEY,
        'THEME_KEY': quiz_state.THEME_KEY,
        'PAGE_SIZES': list(quiz_state.PAGE_SIZES),
        'DEFAULT_PAGE_SIZE': quiz_state.DEFAULT_PAGE_SIZE,
        'PAYLOAD_ID': PAYLOAD_ID,
    }
    return '\n'.join(f'const {k} = {json.dumps(v)};' for k, v in values.items())


_JS_BODY = """
/* === 本地儲存（localStorage 包裝）=== */
const store = {
  get: function(key) { try { return localStorage.getItem(key); } catch(e) { return null; } },
  set: function(key, value) { try { localStorage.setItem(key, value); } catch(e) {} },
  clear: function(key) { try { localStorage.removeItem(key); } catch(e) {} }
};

function loadFlags(kv) {
  var raw = kv.get(FLAGS_KEY);
  if (!raw) return new Set();
  try {
    var data = JSON.parse(raw);
    if (!Array.isArray(data)) return new Set();
    return new Set(data.filter(function(i) { return typeof i === 'string'; }));
  } catch(e) { return new Set(); }
}
function saveFlags(kv, ids) { kv.set(FLAGS_KEY, JSON.stringify(Array.from(ids).sort())); }

/* === 狀態（純函數，回傳 {state, render, questionId}）=== */
function initialState(questions, kv) {
  return {
    allQuestions: questions, activeFilter: null, searchTerm: '', currentPage: 1,
    pageSize: DEFAULT_PAGE_SIZE, flaggedIds: loadFlags(kv), quizMode: false,
    quizSize: 0, quizSample: [], revealedIds: new Set()
  };
}
function assign(s, changes) { return Object.assign({}, s, changes); }
function update(s, render, questionId) { return { state: s, render: render || [], questionId: questionId || null }; }

function categoriesOf(questions) {
  var seen = new Set(questions.map(function(q) { return q.category; }));
  return Array.from(seen).sort(function(a, b) { return a.localeCompare(b, undefined, { sensitivity: 'base' }); });
}
function matchesSearch(q, term) {
  var needle = term.toLowerCase();
  if ((q.question || '').toLowerCase().indexOf(needle) !== -1) return true;
  return q.options.some(function(o) { return o.toLowerCase().indexOf(needle) !== -1; });
}
function sourceQuestions(s) {
  if (s.quizMode) return s.quizSample;
  if (s.activeFilter === FLAGGED) return s.allQuestions.filter(function(q) { return s.flaggedIds.has(q.id); });
  if (s.activeFilter) return s.allQuestions.filter(function(q) { return q.category === s.activeFilter; });
  if (s.searchTerm.trim()) return s.allQuestions;
  return [];
}
function filteredQuestions(s) {
  var source = sourceQuestions(s);
  var term = s.searchTerm.trim();
  if (!term) return source;
  return source.filter(function(q) { return matchesSearch(q, term); });
}
function pageCount(s) { return Math.ceil(filteredQuestions(s).length / s.pageSize); }
function pageItems(s) {
  var start = (s.currentPage - 1) * s.pageSize;
  return filteredQuestions(s).slice(start, start + s.pageSize);
}
function clampPage(s, page) { return Math.max(1, Math.min(page, Math.max(1, pageCount(s)))); }

function selectCategory(s, category) {
  return update(assign(s, { activeFilter: category || null, currentPage: 1, quizMode: false, quizSize: 0, quizSample: [] }),
                ['list', 'pagination', 'filters']);
}
function setSearch(s, term) { return update(assign(s, { searchTerm: term || '', currentPage: 1 }), ['list', 'pagination']); }
function setPageSize(s, size) {
  size = parseInt(size, 10);
  if (!(size >= 1)) return update(s);
  return update(assign(s, { pageSize: size, currentPage: 1 }), ['list', 'pagination']);
}
function goToPage(s, page) {
  page = clampPage(s, page);
  if (page === s.currentPage) return update(s);
  return update(assign(s, { currentPage: page }), ['list', 'pagination']);
}
function toggleFlag(s, id, kv) {
  var flags = new Set(s.flaggedIds);
  if (flags.has(id)) flags.delete(id); else flags.add(id);
  saveFlags(kv, flags);
  var next = assign(s, { flaggedIds: flags });
  if (s.activeFilter === FLAGGED && !s.quizMode) {
    next = assign(next, { currentPage: clampPage(next, next.currentPage) });
    return update(next, ['list', 'pagination'], id);
  }
  return update(next, ['flag'], id);
}
function shuffled(items) {
  var result = items.slice();
  for (var i = result.length - 1; i > 0; i--) {
    var j = Math.floor(Math.random() * (i + 1));
    var t = result[i]; result[i] = result[j]; result[j] = t;
  }
  return result;
}
function startQuiz(s, category, count) {
  count = parseInt(count, 10);
  if (!category || category === FLAGGED || !(count >= 1)) return update(s);
  var pool = s.allQuestions.filter(function(q) { return q.category === category; });
  var sample = shuffled(pool).slice(0, count);
  return update(assign(s, { activeFilter: category, searchTerm: '', currentPage: 1, quizMode: true,
                            quizSize: sample.length, quizSample: sample, revealedIds: new Set() }),
                ['list', 'pagination', 'filters']);
}
function exitQuiz(s) { return selectCategory(s, s.activeFilter); }
function toggleReveal(s, id) {
  var revealed = new Set(s.revealedIds);
  if (revealed.has(id)) revealed.delete(id); else revealed.add(id);
  return update(assign(s, { revealedIds: revealed }), ['reveal'], id);
}
function revealAll(s, on) {
  var revealed = new Set(s.revealedIds);
  pageItems(s).forEach(function(q) { if (on) revealed.add(q.id); else revealed.delete(q.id); });
  return update(assign(s, { revealedIds: revealed }), ['reveal']);
}

/* === 繪製（只用 textContent 與 DOM 節點）=== */
let state = null;
function debounce(fn, ms) {
  let t;
  const wrapped = function(...a) { clearTimeout(t); t = setTimeout(() => fn.apply(this, a), ms); };
  wrapped.cancel = function() { clearTimeout(t); };
  return wrapped;
}
function el(tag, className, text) {
  var node = document.createElement(tag);
  if (className) node.className = className;
  if (text !== undefined && text !== null) node.textContent = text;
  return node;
}
function clear(node) { while (node.firstChild) node.removeChild(node.firstChild); }
function findCard(id) {
  var cards = document.querySelectorAll('#quiz-container .question-card');
  for (var i = 0; i < cards.length; i++) { if (cards[i].dataset.id === id) return cards[i]; }
  return null;
}

function applyUpdate(u) {
  state = u.state;
  var r = u.render;
  if (r.indexOf('filters') !== -1) renderFilters();
  if (r.indexOf('list') !== -1) renderList();
  if (r.indexOf('pagination') !== -1) renderPagination();
  if (r.indexOf('flag') !== -1) renderFlag(u.questionId);
  if (r.indexOf('reveal') !== -1) {
    if (u.questionId) renderReveal(findCard(u.questionId));
    else document.querySelectorAll('#quiz-container .question-card').forEach(renderReveal);
  }
}

function renderFlag(id) {
  var card = findCard(id);
  if (!card) return;
  var btn = card.querySelector('.flag-btn');
  var on = state.flaggedIds.has(id);
  btn.classList.toggle('active', on);
  btn.textContent = on ? '★' : '☆';
  btn.setAttribute('aria-pressed', on ? 'true' : 'false');
}

function renderReveal(card) {
  if (!card) return;
  var on = state.revealedIds.has(card.dataset.id);
  card.classList.toggle('revealed', on);
  card.querySelector('.reveal-btn').textContent = on ? 'Hide Answer' : 'Show Answer';
}

function buildCard(q, number) {
  var card = el('div', 'question-card');
  card.dataset.id = q.id;
  var head = el('div', 'question-head');
  head.appendChild(el('span', 'q-number', String(number)));
  var body = el('div', 'question-text', q.question);
  if (state.activeFilter === FLAGGED || !state.activeFilter) {
    body.appendChild(document.createElement('br'));
    body.appendChild(el('span', 'q-category', q.category));
  }
  head.appendChild(body);
  var flag = el('button', 'flag-btn');
  flag.type = 'button';
  flag.title = 'Flag for review';
  flag.setAttribute('aria-label', 'Toggle review flag');
  head.appendChild(flag);
  card.appendChild(head);

  var list = el('ul', 'options-list');
  q.options.forEach(function(o) { list.appendChild(el('li', null, o)); });
  card.appendChild(list);

  var btn = el('button', 'reveal-btn', 'Show Answer');
  btn.type = 'button';
  card.appendChild(btn);

  var answer = el('div', 'answer-reveal');
  var line = el('p');
  line.appendChild(el('span', 'answer-label', 'Correct Answer(s): '));
  line.appendChild(document.createTextNode(q.correctAnswers.length ? q.correctAnswers.join(', ') : '-'));
  answer.appendChild(line);
  if (q.justification) answer.appendChild(el('p', 'justification', q.justification));
  card.appendChild(answer);
  return card;
}

function renderList() {
  var container = document.getElementById('quiz-container');
  clear(container);
  var items = pageItems(state);
  if (!state.activeFilter && !state.quizMode && !state.searchTerm.trim()) {
    container.appendChild(el('div', 'initial-prompt', 'Select a subject or type a search term to begin.'));
  } else if (!items.length) {
    container.appendChild(el('div', 'initial-prompt',
      state.activeFilter === FLAGGED ? 'No flagged questions yet.' : 'No questions found.'));
  } else {
    var offset = (state.currentPage - 1) * state.pageSize;
    items.forEach(function(q, i) {
      var card = buildCard(q, offset + i + 1);
      container.appendChild(card);
      renderFlag(q.id);
      renderReveal(card);
    });
  }
  var total = filteredQuestions(state).length;
  var status = document.getElementById('status-text');
  if (state.quizMode) status.textContent = 'Quiz: ' + state.quizSize + ' random questions from ' + state.activeFilter;
  else if (state.activeFilter || state.searchTerm.trim()) status.textContent = total + ' question' + (total === 1 ? '' : 's');
  else status.textContent = '';
}

function renderPagination() {
  var box = document.getElementById('pagination-container');
  clear(box);
  var pages = pageCount(state);
  if (pages <= 1) return;
  var prev = el('button', null, 'Previous');
  prev.type = 'button';
  prev.dataset.action = 'prev';
  prev.disabled = state.currentPage === 1;
  var next = el('button', null, 'Next');
  next.type = 'button';
  next.dataset.action = 'next';
  next.disabled = state.currentPage === pages;
  var info = el('span', 'page-info', 'Page ' + state.currentPage + ' of ' + pages);
  box.appendChild(prev);
  box.appendChild(info);
  box.appendChild(next);
}

function renderFilters() {
  var cat = document.getElementById('category-filter');
  cat.value = state.activeFilter || '';
  var concrete = !!state.activeFilter && state.activeFilter !== FLAGGED;
  document.getElementById('quiz-start').disabled = !concrete;
  document.getElementById('quiz-exit').classList.toggle('hidden', !state.quizMode);
  var search = document.getElementById('search-input');
  if (search.value !== state.searchTerm) search.value = state.searchTerm;
}

function populateControls(questions) {
  var cat = document.getElementById('category-filter');
  var placeholder = el('option', null, 'Select a subject...');
  placeholder.value = '';
  placeholder.disabled = true;
  placeholder.selected = true;
  cat.appendChild(placeholder);
  categoriesOf(questions).forEach(function(c) {
    var count = questions.filter(function(q) { return q.category === c; }).length;
    var opt = el('option', null, c + ' (' + count + ')');
    opt.value = c;
    cat.appendChild(opt);
  });
  var flagged = el('option', null, '★ Flagged for review');
  flagged.value = FLAGGED;
  cat.appendChild(flagged);

  var size = document.getElementById('page-size');
  PAGE_SIZES.forEach(function(n) {
    var opt = el('option', null, n + ' per page');
    opt.value = String(n);
    if (n === DEFAULT_PAGE_SIZE) opt.selected = true;
    size.appendChild(opt);
  });
}

/* === Dark mode === */
function initDarkMode() {
  var toggle = document.getElementById('dark-toggle');
  var saved = store.get(THEME_KEY);
  if (saved === 'true' || (saved !== 'false' && window.matchMedia && window.matchMedia('(prefers-color-scheme: dark)').matches)) {
    document.documentElement.classList.add('dark');
  }
  toggle.addEventListener('click', function() {
    var isDark = document.documentElement.classList.toggle('dark');
    store.set(THEME_KEY, String(isDark));
  });
}

document.addEventListener('DOMContentLoaded', function() {
  var questions = [];
  try { questions = JSON.parse(document.getElementById(PAYLOAD_ID).textContent); } catch(e) { questions = []; }
  state = initialState(questions, store);
  populateControls(questions);

  document.getElementById('category-filter').addEventListener('change', function(e) {
    applyUpdate(selectCategory(state, e.target.value));
  });
  var searchInput = document.getElementById('search-input');
  var debouncedSearch = debounce(function() { applyUpdate(setSearch(state, searchInput.value)); }, window.innerWidth <= 768 ? 300 : 180);
  searchInput.addEventListener('input', function() { debouncedSearch(); });
  document.getElementById('page-size').addEventListener('change', function(e) {
    applyUpdate(setPageSize(state, e.target.value));
  });
  document.getElementById('pagination-container').addEventListener('click', function(e) {
    var btn = e.target.closest('button');
    if (!btn || btn.disabled) return;
    var u = btn.dataset.action === 'next' ? goToPage(state, state.currentPage + 1) : goToPage(state, state.currentPage - 1);
    applyUpdate(u);
    window.scrollTo(0, 0);
  });
  document.getElementById('quiz-container').addEventListener('click', function(e) {
    var card = e.target.closest('.question-card');
    if (!card) return;
    if (e.target.closest('.flag-btn')) applyUpdate(toggleFlag(state, card.dataset.id, store));
    else if (e.target.closest('.reveal-btn')) applyUpdate(toggleReveal(state, card.dataset.id));
  });
  document.getElementById('reveal-all').addEventListener('click', function() { applyUpdate(revealAll(state, true)); });
  document.getElementById('hide-all').addEventListener('click', function() { applyUpdate(revealAll(state, false)); });
  document.getElementById('quiz-start').addEventListener('click', function() {
    applyUpdate(startQuiz(state, state.activeFilter, document.getElementById('quiz-count').value));
  });
  document.getElementById('quiz-exit').addEventListener('click', function() { applyUpdate(exitQuiz(state)); });

  /* Keyboard shortcuts */
  document.addEventListener('keydown', function(e) {
    if (e.key === '/' && !e.target.closest('input,textarea,select')) { e.preventDefault(); searchInput.focus(); }
    if (e.key === 'Escape' && document.activeElement === searchInput) {
      debouncedSearch.cancel();
      searchInput.value = ''; applyUpdate(setSearch(state, '')); searchInput.blur();
    }
  });

  initDarkMode();
  applyUpdate(update(state, ['filters', 'list', 'pagination']));
});
"""


def generate_shared_js():
    """生成前端互動腳本（常數取自 quiz_state）"""
    return "/* === 題庫前端（資料來自頁面內嵌 JSON）=== */\n" + _js_constants() + "\n" + _JS_BODY


def render_page(questions, title, logo_name=None):
    """生成 index.html"""
    cats = quiz_state.categories(questions)
    logo_html = f'<img class="site-logo" src="{escape_html(logo_name)}" alt="">' if logo_name else ''
    return f'''<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{escape_html(title)}</title>
<meta name="description" content="{escape_html(title)}: {len(questions)} questions in {len(cats)} subjects">
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Roboto:wght@400;500;700&display=swap" rel="stylesheet">
<link rel="stylesheet" href="style.css">
</head>
<body>
<div class="container">
<header class="site-header">
{logo_html}
<div style="flex:1">
<h1 class="page-title">{escape_html(title)}</h1>
<p class="page-subtitle">{len(questions)} questions &middot; {len(cats)} subjects</p>
</div>
<button class="dark-toggle" id="dark-toggle" type="button" aria-label="Toggle dark mode">&#9680;</button>
</header>
<div class="toolbar" id="toolbar">
<select id="category-filter" aria-label="Subject"></select>
<input class="search-input" id="search-input" type="search" placeholder="Search questions... ( / )" aria-label="Search">
<select id="page-size" aria-label="Questions per page"></select>
</div>
<div class="toolbar" id="quiz-toolbar">
<input class="quiz-count" id="quiz-count" type="number" min="1" value="10" aria-label="Quiz size">
<button class="toolbar-btn" id="quiz-start" type="button" disabled>Start Quiz</button>
<button class="toolbar-btn hidden" id="quiz-exit" type="button">Exit Quiz</button>
<button class="toolbar-btn" id="reveal-all" type="button">Reveal All</button>
<button class="toolbar-btn" id="hide-all" type="button">Hide All</button>
</div>
<div class="status-text" id="status-text" aria-live="polite"></div>
<main id="quiz-container"></main>
<nav class="pagination" id="pagination-container" aria-label="Pagination"></nav>
</div>
<script id="{PAYLOAD_ID}" type="application/json">{serialize_questions(questions)}</script>
<script src="script.js"></script>
</body>
</html>
'''


def _write_text(path, content):
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise BuildError(f"無法寫入 {path}: {e}") from e


def _logo_source(logo_path):
    """檢查選用的標誌圖檔；不存在時只記錄警告"""
    if not logo_path:
        return None
    src = Path(logo_path)
    if not src.is_file():
        logger.warning(f"找不到標誌圖檔，略過: {src}")
        return None
    return src


def copy_logo(logo_path, output_dir):
    """複製選用的標誌圖檔；不存在時只記錄警告

    Returns:
        str | None: 輸出目錄內的檔名
    """
    src = _logo_source(logo_path)
    if src is None:
        return None
    try:
        shutil.copy2(src, Path(output_dir) / src.name)
    except OSError as e:
        logger.warning(f"標誌圖檔複製失敗，略過: {e}")
        return None
    return src.name


def write_site(questions, output_dir, title, logo_path=None):
    """寫出完整網站並驗證內嵌資料

    所有內容先在記憶體中產生並驗證，驗證失敗時不建立輸出目錄。

    Returns:
        dict: 各輸出檔案路徑
    """
    logo = _logo_source(logo_path)
    logo_name = logo.name if logo else None
    page_html = render_page(questions, title, logo_name)
    verify_payload(page_html, questions)
    contents = {
        'html': ('index.html', page_html),
        'css': ('style.css', generate_shared_css()),
        'js': ('script.js', generate_shared_js()),
    }

    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        raise BuildError(f"無法建立輸出目錄 {output_dir}: {e}") from e

    paths = {}
    for kind, (name, content) in contents.items():
        paths[kind] = os.path.join(output_dir, name)
        _write_text(paths[kind], content)
    if logo_name and copy_logo(logo, output_dir):
        paths['logo'] = os.path.join(output_dir, logo_name)

    for kind, path in paths.items():
        logger.debug(f"  {kind}: {path}")
    return paths
