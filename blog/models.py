# blog/models.py

from datetime import datetime
import pytz
from sqlalchemy.orm import relationship

from blog.extensions import db
from blog.utils import word_count, reading_time


def utcnow():
    return datetime.now(pytz.utc)


def isoformat(value):
    return value.isoformat() if value else None


# 多対多のリレーションシップ用ヘルパーテーブル
# どちらの親が削除されても関連行はカスケードで削除されます
posts_to_categories = db.Table(
    'posts_to_categories',
    db.Column('post_id', db.Integer, db.ForeignKey('posts.id', ondelete='CASCADE'), primary_key=True),
    db.Column('category_id', db.Integer, db.ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True)
)


class Category(db.Model):
    """
    投稿を整理するためのカテゴリを表します。
    スラッグはカテゴリ全体で一意です。
    """
    __tablename__ = 'categories'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    slug = db.Column(db.Text, nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    posts = relationship('Post', secondary=posts_to_categories, back_populates='categories')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'slug': self.slug,
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Category {self.name}>'


class Post(db.Model):
    """
    ブログ投稿を表し、その本文 (Markdown)、公開ステータス、
    およびカテゴリとの関係を含みます。
    """
    __tablename__ = 'posts'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=False)
    slug = db.Column(db.Text, nullable=False, unique=True)
    published = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    categories = relationship(
        'Category',
        secondary=posts_to_categories,
        back_populates='posts',
        order_by='Category.id'
    )

    @property
    def category_ids(self):
        return [category.id for category in self.categories]

    @property
    def word_count(self):
        return word_count(self.content)

    @property
    def reading_time(self):
        return reading_time(self.content)

    def to_dict(self, include_categories=True):
        data = {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'slug': self.slug,
            'published': self.published,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'word_count': self.word_count,
            'reading_time': self.reading_time,
        }
        if include_categories:
            data['categories'] = [
                {'category_id': category.id, 'category': category.to_dict()}
                for category in self.categories
            ]
        return data

    def __repr__(self):
        return f'<Post {self.title}>'
