# config.py
import os

# BASE_DIR はプロジェクトのルートディレクトリを指します
BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Config:
    # アプリケーションのセキュリティキー (本番環境では環境変数で必ず上書きすること)
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-me')

    # データベースのURI設定
    # SQLiteデータベースファイルが 'instance' フォルダ内に作成されます
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        'sqlite:///' + os.path.join(BASE_DIR, 'instance', 'blog.db')
    )
    # SQLAlchemyのイベントトラッキングを無効にします (リソース節約のため)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'

    # --- 一覧・ページネーション関連の設定 ---
    POSTS_PER_PAGE = int(os.environ.get('POSTS_PER_PAGE', 10))
    # page_size に指定できる上限
    MAX_PAGE_SIZE = int(os.environ.get('MAX_PAGE_SIZE', 100))
    # ダッシュボードに表示する最新記事の件数
    DASHBOARD_RECENT_POSTS = 5

    # --- ロギング ---
    LOG_DIR = os.environ.get('LOG_DIR', os.path.join(BASE_DIR, 'logs'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # ファイルへのログ出力を無効にしたい場合 (コンテナなど) は 0 を設定
    LOG_TO_FILE = os.environ.get('LOG_TO_FILE', '1') == '1'


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'  # メモリ上のDBを使用
    WTF_CSRF_ENABLED = False  # テスト中はCSRFを無効にする
    LOG_TO_FILE = False
    POSTS_PER_PAGE = 6
