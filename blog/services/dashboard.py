# blog/services/dashboard.py

from flask import current_app
from sqlalchemy import func

from blog.extensions import db
from blog.models import Post
from blog.services.category_store import list_categories_with_post_counts
from blog.services.query import build_posts_query
from blog.utils import format_date


def dashboard_summary():
    """ダッシュボード用の集計 (投稿数・公開数・下書き数・カテゴリ一覧・最新記事)"""
    total_posts = db.session.query(func.count(Post.id)).scalar()
    published_posts = db.session.query(func.count(Post.id)).filter(Post.published == True).scalar()  # noqa: E712

    recent_limit = current_app.config.get('DASHBOARD_RECENT_POSTS', 5)
    recent_posts = build_posts_query().limit(recent_limit).all()

    categories = [
        dict(category.to_dict(), post_count=post_count)
        for category, post_count in list_categories_with_post_counts()
    ]

    return {
        'total_posts': total_posts,
        'published_posts': published_posts,
        'draft_posts': total_posts - published_posts,
        'total_categories': len(categories),
        'categories': categories,
        'recent_posts': [
            {
                'id': post.id,
                'title': post.title,
                'slug': post.slug,
                'published': post.published,
                'date': format_date(post.created_at),
                'reading_time': post.reading_time,
            }
            for post in recent_posts
        ],
    }
