# blog/services/query.py

import logging
from dataclasses import dataclass, field

from flask import current_app
from sqlalchemy import false
from sqlalchemy.orm import selectinload

from blog.errors import ValidationError
from blog.models import Category, Post
from blog.services.common import in_id_range

logger = logging.getLogger(__name__)


@dataclass
class PostPage:
    """query_posts の結果 (1ページ分の投稿と、ページング前の総件数)。"""
    items: list = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def total_pages(self):
        if self.total_count == 0:
            return 0
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_next(self):
        return self.page < self.total_pages

    @property
    def has_prev(self):
        return self.page > 1

    def to_dict(self):
        return {
            'items': [post.to_dict() for post in self.items],
            'total_count': self.total_count,
            'page': self.page,
            'page_size': self.page_size,
            'total_pages': self.total_pages,
            'has_next': self.has_next,
            'has_prev': self.has_prev,
        }


def build_posts_query(category_id=None, published=None, search=None):
    """
    絞り込み済みの投稿クエリを組み立てます (新しい順、同時刻は id 降順)。

    カテゴリの絞り込みは関連テーブルへの EXISTS (セミジョイン) として
    SQL 側で行い、関連行をすべて取得してから絞り込むことはしません。
    """
    query = Post.query.options(selectinload(Post.categories))

    if category_id is not None:
        if in_id_range(category_id):
            query = query.filter(Post.categories.any(Category.id == category_id))
        else:
            query = query.filter(false())

    if published is not None:
        query = query.filter(Post.published == bool(published))

    if search:
        query = query.filter(
            Post.title.icontains(search, autoescape=True)
            | Post.content.icontains(search, autoescape=True)
        )

    return query.order_by(Post.created_at.desc(), Post.id.desc())


def _check_positive(value, name):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f'{name} は1以上の整数で指定してください。', {name: ['invalid']})
    return value


def query_posts(category_id=None, published=None, search=None, page=1, page_size=None):
    """
    条件に合う投稿を1ページ分取得します。

    :param category_id: このカテゴリに関連付いた投稿のみ
    :param published: 公開状態が一致する投稿のみ
    :param search: タイトルまたは本文に含まれる文字列 (大文字小文字を区別しない)
    :param page: 1始まりのページ番号。最終ページより後ろは空のリストになる
    :param page_size: 1ページの件数。省略時は POSTS_PER_PAGE
    """
    if page_size is None:
        page_size = current_app.config.get('POSTS_PER_PAGE', 10)
    page = _check_positive(page, 'page')
    page_size = _check_positive(page_size, 'page_size')
    page_size = min(page_size, current_app.config.get('MAX_PAGE_SIZE', 100))

    if search is not None:
        search = search.strip() or None

    query = build_posts_query(category_id=category_id, published=published, search=search)
    pagination = query.paginate(page=page, per_page=page_size, error_out=False)

    logger.debug(
        f"query_posts category_id={category_id} published={published} search={search!r} "
        f"page={page} page_size={page_size} -> {pagination.total} posts"
    )
    return PostPage(
        items=list(pagination.items),
        total_count=pagination.total,
        page=page,
        page_size=page_size,
    )
