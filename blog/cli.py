# blog/cli.py

import click
from flask.cli import with_appcontext

from blog.errors import BlogError
from blog.extensions import db
from blog.services import category_store, post_store
from blog.utils import slugify

# flask init seed で投入するサンプルデータ
SAMPLE_CATEGORIES = [
    ('Tech', 'Programming, tools and infrastructure.'),
    ('Life', 'Notes from everyday life.'),
]

SAMPLE_POSTS = [
    {
        'title': 'Hello, World!',
        'content': '# Hello\n\nThis is the first post on this blog.',
        'published': True,
        'categories': ['Tech'],
    },
    {
        'title': 'Draft ideas',
        'content': '- write about *Markdown*\n- write about pagination',
        'published': False,
        'categories': ['Tech', 'Life'],
    },
]


@click.group()
def init():
    """アプリケーションの初期化と管理コマンド."""
    pass


@init.command('reset-db')
@click.option('--drop-db', is_flag=True, help='既存のテーブルを削除してから作成します。')
@with_appcontext
def reset_db(drop_db):
    """データベースのテーブルを作成します。"""
    if drop_db:
        click.echo('既存のテーブルを削除中...')
        db.drop_all()

    click.echo('データベーステーブルを作成中...')
    db.create_all()
    click.echo('データベースの初期化が完了しました。')


@init.command('seed')
@with_appcontext
def seed():
    """サンプルのカテゴリと投稿を作成します (既に存在するものはスキップ)。"""
    category_ids = {}
    for name, description in SAMPLE_CATEGORIES:
        try:
            category = category_store.create_category(name, description)
            click.echo(f"  - カテゴリ '{name}' を作成しました。")
        except BlogError as e:
            click.echo(f"  - カテゴリ '{name}' をスキップしました: {e.message}", err=True)
            category = category_store.get_category_by_slug(slugify(name))
        category_ids[name] = category.id

    for sample in SAMPLE_POSTS:
        try:
            post_store.create_post(
                title=sample['title'],
                content=sample['content'],
                published=sample['published'],
                category_ids=[category_ids[name] for name in sample['categories']],
            )
            click.echo(f"  - 投稿 '{sample['title']}' を作成しました。")
        except BlogError as e:
            click.echo(f"  - 投稿 '{sample['title']}' をスキップしました: {e.message}", err=True)

    click.echo('サンプルデータの投入が完了しました。')
