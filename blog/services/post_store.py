# blog/services/post_store.py

import logging

from blog.extensions import db
from blog.errors import NotFound, ValidationError
from blog.models import Post, utcnow
from blog.services.common import require_text, derive_slug, ensure_unique_slug, lookup_by_id, unit_of_work
from blog.services.query import build_posts_query
from blog.services.relationships import apply_categories, resolve_categories

logger = logging.getLogger(__name__)


def _check_published(value):
    if not isinstance(value, bool):
        raise ValidationError('published は true / false で指定してください。', {'published': ['not_a_boolean']})
    return value


def list_posts(category_id=None, published=None):
    """投稿を新しい順で返します。カテゴリ・公開状態で絞り込めます。"""
    return build_posts_query(category_id=category_id, published=published).all()


def get_post(post_id):
    post = lookup_by_id(Post, post_id)
    if post is None:
        logger.warning(f"Post not found: id={post_id}")
        raise NotFound(f'投稿 (id={post_id}) が見つかりません。')
    return post


def get_post_by_slug(slug):
    post = Post.query.filter_by(slug=slug).first()
    if post is None:
        logger.warning(f"Post not found: slug={slug}")
        raise NotFound(f'投稿 "{slug}" が見つかりません。')
    return post


def create_post(title, content, published=False, category_ids=None):
    """
    投稿を作成し、指定されたカテゴリとの関連付けを同じトランザクションで行います。
    カテゴリIDが不正な場合は投稿も作成されません。
    """
    title = require_text(title, 'title', 'タイトル')
    if not isinstance(content, str) or not content.strip():
        raise ValidationError('本文は必須です。', {'content': ['required']})
    published = _check_published(published)
    slug = derive_slug(title, 'title')
    ensure_unique_slug(Post, slug)

    with unit_of_work('creating post'):
        post = Post(title=title, content=content, slug=slug, published=published)
        apply_categories(post, category_ids)
        db.session.add(post)

    logger.info(f"Post created: id={post.id} slug={post.slug} categories={post.category_ids}")
    return post


def update_post(post_id, title=None, content=None, published=None, category_ids=None):
    """
    指定されたフィールドだけを更新します (None は「変更なし」)。
    category_ids を渡した場合は空リストであってもカテゴリ集合を丸ごと置き換えます。
    """
    post = get_post(post_id)

    slug = None
    if title is not None:
        title = require_text(title, 'title', 'タイトル')
        slug = derive_slug(title, 'title')
        ensure_unique_slug(Post, slug, exclude_id=post.id)
    if content is not None and (not isinstance(content, str) or not content.strip()):
        raise ValidationError('本文は必須です。', {'content': ['required']})
    if published is not None:
        published = _check_published(published)
    categories = None
    if category_ids is not None:
        categories = resolve_categories(category_ids)

    with unit_of_work(f'updating post {post_id}'):
        if title is not None:
            post.title = title
            post.slug = slug
        if content is not None:
            post.content = content
        if published is not None:
            post.published = published
        if categories is not None:
            post.categories = categories
        post.updated_at = utcnow()

    logger.info(f"Post updated: id={post.id} slug={post.slug}")
    return post


def delete_post(post_id):
    """投稿を削除します。関連行はカスケードで削除されます。"""
    post = get_post(post_id)
    with unit_of_work(f'deleting post {post_id}'):
        db.session.delete(post)
    logger.info(f"Post deleted: id={post_id}")
