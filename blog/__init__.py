# blog/__init__.py

import os
import logging
from logging.handlers import RotatingFileHandler

from flask import Flask

import config  # config モジュールをインポート

from blog.extensions import db, migrate
from blog.utils import render_markdown

# ブループリントをインポート
from blog.routes.home import home_bp
from blog.routes.posts import posts_bp
from blog.routes.categories import categories_bp


# アプリケーションファクトリ関数
def create_app(config_class=config.Config):
    app = Flask(__name__, instance_path=os.path.join(config.BASE_DIR, 'instance'))
    app.config.from_object(config_class)

    # SQLite のデータベースファイルを置く instance フォルダを作成
    os.makedirs(app.instance_path, exist_ok=True)

    # 拡張機能の初期化
    db.init_app(app)
    migrate.init_app(app, db)

    configure_logging(app)

    # MarkdownをHTMLに変換するJinja2フィルターを登録 ({{ post.content | markdown | safe }})
    app.jinja_env.filters['markdown'] = render_markdown

    # 各種ブループリントの登録
    app.register_blueprint(home_bp)
    app.register_blueprint(posts_bp)
    app.register_blueprint(categories_bp)

    # CLI コマンドの登録
    from blog import cli
    app.cli.add_command(cli.init)

    return app


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    formatter = logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    handlers = []
    if app.config.get('LOG_TO_FILE', True):
        log_dir = app.config['LOG_DIR']
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(os.path.join(log_dir, 'blog.log'), maxBytes=10240, backupCount=10)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        handlers.append(file_handler)

    # stdout へのロギング設定 (Gunicorn などでコンソール出力を見るため)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    handlers.append(stream_handler)

    # app.logger (名前は 'blog') に設定すると、サービス層のモジュールロガー (blog.*) の出力もここに流れる
    for handler in list(app.logger.handlers):
        if getattr(handler, '_blog_handler', False):
            app.logger.removeHandler(handler)
    for handler in handlers:
        handler._blog_handler = True
        app.logger.addHandler(handler)
    app.logger.setLevel(level)

    app.logger.info('Blog startup')
