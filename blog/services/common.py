# blog/services/common.py
"""ストア間で共有するバリデーションとトランザクションのヘルパー。"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError as DBIntegrityError

from blog.extensions import db
from blog.errors import BlogError, ValidationError, Conflict, IntegrityError
from blog.utils import slugify

logger = logging.getLogger(__name__)

# SQLite の INTEGER (符号付き64ビット) で表現できる範囲
MIN_ID = -2 ** 63
MAX_ID = 2 ** 63 - 1


def require_text(value, field, label):
    """空でない文字列であることを確認し、前後の空白を除いて返します。"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{label}は必須です。', {field: ['required']})
    return value.strip()


def optional_text(value, field, label):
    """None または文字列であることを確認します。空文字は None として扱います。"""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{label}は文字列で指定してください。', {field: ['not_a_string']})
    return value.strip() or None


def derive_slug(text, field):
    slug = slugify(text)
    if not slug:
        raise ValidationError(
            'スラッグを生成できません。英数字を1文字以上含めてください。',
            {field: ['slug_empty']}
        )
    return slug


def ensure_unique_slug(model, slug, exclude_id=None):
    """同じスラッグを持つ別のレコードが存在すれば Conflict を送出します。"""
    query = model.query.filter_by(slug=slug)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    if query.first() is not None:
        logger.warning(f"Slug conflict on {model.__tablename__}: {slug}")
        raise Conflict(f'スラッグ "{slug}" は既に使われています。', {'slug': slug})


def normalize_ids(values, field='category_ids'):
    """
    IDのリストを検証し、重複を除いて昇順に並べて返します。
    bool や文字列は受け付けません。
    """
    if values is None:
        return []
    if isinstance(values, (str, bytes)):
        raise ValidationError('IDのリストを指定してください。', {field: ['not_a_list']})
    try:
        items = list(values)
    except TypeError:
        raise ValidationError('IDのリストを指定してください。', {field: ['not_a_list']})
    for item in items:
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValidationError(f'不正なIDです: {item!r}', {field: ['not_an_integer']})
        if not in_id_range(item):
            raise ValidationError(f'IDが範囲外です: {item!r}', {field: ['out_of_range']})
    return sorted(set(items))


def in_id_range(value):
    return MIN_ID <= value <= MAX_ID


def lookup_by_id(model, record_id):
    """主キーでレコードを取得します。存在しない場合 (範囲外の整数を含む) は None。"""
    if isinstance(record_id, int) and not in_id_range(record_id):
        return None
    return db.session.get(model, record_id)


@contextmanager
def unit_of_work(description):
    """
    ブロック内の変更を1つのトランザクションとしてコミットします。
    途中で失敗した場合はロールバックして例外を再送出します。
    """
    try:
        yield db.session
        db.session.commit()
    except DBIntegrityError as e:
        db.session.rollback()
        logger.error(f"IntegrityError while {description}: {e}", exc_info=True)
        if 'slug' in str(e.orig).lower():
            raise Conflict('スラッグが既存のレコードと衝突しました。') from e
        raise IntegrityError('参照整合性エラーが発生しました。') from e
    except BlogError:
        db.session.rollback()
        raise
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error while {description}: {e}", exc_info=True)
        raise
