# blog/services/category_store.py

import logging

from sqlalchemy import func

from blog.extensions import db
from blog.errors import NotFound
from blog.models import Category, posts_to_categories
from blog.services.common import (
    require_text, optional_text, derive_slug, ensure_unique_slug, lookup_by_id, unit_of_work,
)

logger = logging.getLogger(__name__)


def list_categories():
    """全カテゴリを作成順 (id 昇順) で返します。"""
    return Category.query.order_by(Category.id.asc()).all()


def list_categories_with_post_counts():
    """(Category, 関連する投稿数) のタプルのリストを返します。"""
    return (
        db.session.query(Category, func.count(posts_to_categories.c.post_id))
        .outerjoin(posts_to_categories, posts_to_categories.c.category_id == Category.id)
        .group_by(Category.id)
        .order_by(Category.id.asc())
        .all()
    )


def get_category(category_id):
    category = lookup_by_id(Category, category_id)
    if category is None:
        logger.warning(f"Category not found: id={category_id}")
        raise NotFound(f'カテゴリ (id={category_id}) が見つかりません。')
    return category


def get_category_by_slug(slug):
    category = Category.query.filter_by(slug=slug).first()
    if category is None:
        logger.warning(f"Category not found: slug={slug}")
        raise NotFound(f'カテゴリ "{slug}" が見つかりません。')
    return category


def create_category(name, description=None):
    name = require_text(name, 'name', 'カテゴリ名')
    description = optional_text(description, 'description', '説明')
    slug = derive_slug(name, 'name')
    ensure_unique_slug(Category, slug)

    with unit_of_work('creating category'):
        category = Category(name=name, description=description, slug=slug)
        db.session.add(category)

    logger.info(f"Category created: id={category.id} slug={category.slug}")
    return category


def update_category(category_id, name=None, description=None):
    """
    name / description のうち指定されたものだけを更新します。
    name を変更した場合はスラッグも再生成し、自分以外との衝突を確認します。
    description に空文字を渡すと説明を削除します。
    """
    category = get_category(category_id)

    slug = None
    if name is not None:
        name = require_text(name, 'name', 'カテゴリ名')
        slug = derive_slug(name, 'name')
        ensure_unique_slug(Category, slug, exclude_id=category.id)

    description_supplied = description is not None
    description = optional_text(description, 'description', '説明')

    with unit_of_work(f'updating category {category_id}'):
        if name is not None:
            category.name = name
            category.slug = slug
        if description_supplied:
            category.description = description

    logger.info(f"Category updated: id={category.id} slug={category.slug}")
    return category


def delete_category(category_id):
    """
    カテゴリを削除し、関連する posts_to_categories の行も削除します。
    投稿自体は削除されません。存在しないIDは NotFound になります。
    """
    category = get_category(category_id)
    with unit_of_work(f'deleting category {category_id}'):
        db.session.delete(category)
    logger.info(f"Category deleted: id={category_id}")
