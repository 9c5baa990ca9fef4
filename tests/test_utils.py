# tests/test_utils.py
from datetime import datetime

import pytest

from blog.utils import slugify, word_count, reading_time, format_date, render_markdown, parse_bool


@pytest.mark.parametrize('text, expected', [
    ('Hello, World!', 'hello-world'),
    ('Tech', 'tech'),
    ('  Spaces   everywhere  ', 'spaces-everywhere'),
    ('C++ vs. Rust', 'c-vs-rust'),
    ('Café München', 'cafe-munchen'),
    ('snake_case and--dashes', 'snake-case-and-dashes'),
    ('2026 Year in Review', '2026-year-in-review'),
])
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_slugify_without_alphanumerics_is_empty():
    """英数字を含まない入力は空文字になる"""
    assert slugify('') == ''
    assert slugify('!!! ---') == ''
    assert slugify('日本語') == ''


def test_slugify_drops_characters_without_ascii_decomposition():
    assert slugify('Straße') == 'strae'


def test_slugify_is_deterministic():
    assert slugify('Go Report') == slugify('Go Report') == 'go-report'


def test_word_count_and_reading_time():
    content = 'word ' * 250
    assert word_count(content) == 250
    assert reading_time(content) == 2


def test_reading_time_rounds_up():
    assert reading_time('word ' * 200) == 1
    assert reading_time('word ' * 201) == 2
    assert reading_time('one') == 1


def test_word_count_counts_any_whitespace():
    assert word_count('a\tb\nc   d') == 4
    assert word_count('') == 0
    assert reading_time('') == 0


def test_format_date():
    assert format_date(datetime(2026, 10, 9)) == 'October 9, 2026'
    assert format_date(None) == ''


def test_render_markdown():
    html = render_markdown('# Title\n\n**bold** text')
    assert 'Title</h1>' in html
    assert '<strong>bold</strong>' in html


def test_render_markdown_table():
    html = render_markdown('| a | b |\n|---|---|\n| 1 | 2 |')
    assert '<table>' in html


@pytest.mark.parametrize('value, expected', [
    ('true', True), ('1', True), ('Yes', True),
    ('false', False), ('0', False), ('off', False),
    (None, None), ('', None), (True, True),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


def test_parse_bool_rejects_garbage():
    with pytest.raises(ValueError):
        parse_bool('maybe')


def test_markdown_template_filter(app):
    template = app.jinja_env.from_string('{{ content | markdown | safe }}')
    assert '<strong>bold</strong>' in template.render(content='**bold**')
