# blog/utils.py

import math
import re
import unicodedata

import markdown

# 1分あたりの平均読了語数
WORDS_PER_MINUTE = 200

# Markdown 変換で使用する拡張機能
MARKDOWN_EXTENSIONS = [
    'fenced_code',
    'tables',
    'nl2br',
    'sane_lists',
    'codehilite',
    'extra',
]

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}


def slugify(text):
    """
    タイトル・名前からURLセーフなスラッグを生成します。

    アクセント付き文字はASCIIに分解し、英数字以外の連続は1つのハイフンにまとめ、
    先頭・末尾のハイフンは除去します。英数字を1文字も含まない入力 (空文字を含む)
    では空文字を返します。空のスラッグはストア側で ValidationError になります。

    分解できない文字は音訳せずに捨てます ("Straße" -> "strae")。
    """
    if not text:
        return ''
    text = unicodedata.normalize('NFKD', text)
    text = text.encode('ascii', 'ignore').decode('ascii')
    text = text.lower()
    text = re.sub(r'[^a-z0-9]+', '-', text)
    return text.strip('-')


def word_count(content):
    """空白で区切られたトークンの数を返します。"""
    if not content:
        return 0
    return len(content.split())


def reading_time(content):
    """読了時間 (分) = ceil(語数 / 200)"""
    return math.ceil(word_count(content) / WORDS_PER_MINUTE)


def format_date(value):
    """日付を 'October 19, 2026' の形式に整形します。"""
    if value is None:
        return ''
    return f'{value.strftime("%B")} {value.day}, {value.year}'


def render_markdown(text):
    """MarkdownをHTMLに変換します。"""
    return markdown.markdown(text or '', extensions=MARKDOWN_EXTENSIONS)


def parse_bool(value):
    """
    クエリ文字列の真偽値を解釈します。
    None はそのまま返し、解釈できない値は ValueError を送出します。
    """
    if value is None or isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if not lowered:
        return None
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f'Invalid boolean value: {value!r}')
