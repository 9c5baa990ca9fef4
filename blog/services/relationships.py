# blog/services/relationships.py
"""
投稿とカテゴリの多対多の関連 (posts_to_categories) を管理します。

関連は常に「全置換」です。指定されたIDの集合で既存の関連をすべて置き換え、
差分のマージは行いません。存在しないIDが1つでも含まれていれば、
何も変更せずに IntegrityError を送出します。
"""

import logging

from blog.errors import NotFound, IntegrityError
from blog.models import Category, Post, utcnow
from blog.services.common import lookup_by_id, normalize_ids, unit_of_work

logger = logging.getLogger(__name__)


def resolve_categories(category_ids):
    """IDのリストを Category のリスト (id 昇順) に解決します。"""
    ids = normalize_ids(category_ids)
    if not ids:
        return []

    categories = Category.query.filter(Category.id.in_(ids)).order_by(Category.id.asc()).all()
    missing = sorted(set(ids) - {category.id for category in categories})
    if missing:
        logger.warning(f"Unknown category ids referenced: {missing}")
        raise IntegrityError(
            f'存在しないカテゴリIDが指定されました: {missing}',
            {'category_ids': missing}
        )
    return categories


def apply_categories(post, category_ids):
    """
    呼び出し側のトランザクション内で投稿のカテゴリを置き換えます (コミットしない)。
    検証はセッションを変更する前に行われます。
    """
    categories = resolve_categories(category_ids)
    post.categories = categories
    return categories


def set_categories(post_id, category_ids):
    """投稿のカテゴリ集合を category_ids で置き換え、1トランザクションでコミットします。"""
    post = lookup_by_id(Post, post_id)
    if post is None:
        raise NotFound(f'投稿 (id={post_id}) が見つかりません。')

    categories = resolve_categories(category_ids)
    with unit_of_work(f'setting categories of post {post_id}'):
        post.categories = categories
        post.updated_at = utcnow()

    logger.info(f"Post {post_id} categories set to {[c.id for c in categories]}")
    return post


def get_category_ids(post_id):
    post = lookup_by_id(Post, post_id)
    if post is None:
        raise NotFound(f'投稿 (id={post_id}) が見つかりません。')
    return post.category_ids
