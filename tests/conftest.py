# tests/conftest.py
import sys
import os

# プロジェクトのルートディレクトリをPythonのパスに追加
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from blog import create_app
from blog.extensions import db
from blog.services import category_store, post_store
from config import TestConfig


@pytest.fixture(scope='function')
def app():
    """テスト用Flaskアプリケーション (メモリ上のDB、テストごとにテーブルを作り直す)"""
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """テストクライアントを生成するフィクスチャ"""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """CLIコマンドランナーを生成するフィクスチャ"""
    return app.test_cli_runner()


@pytest.fixture
def make_category(app):
    """カテゴリを作成するファクトリ"""
    def _make(name='Tech', description=None):
        return category_store.create_category(name, description)
    return _make


@pytest.fixture
def make_post(app):
    """投稿を作成するファクトリ"""
    def _make(title='Hello, World!', content='Some content here.', published=False, category_ids=None):
        return post_store.create_post(
            title=title,
            content=content,
            published=published,
            category_ids=category_ids or [],
        )
    return _make
