from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine

# 各拡張機能のインスタンスを生成
db = SQLAlchemy()
migrate = Migrate()


@event.listens_for(Engine, 'connect')
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """
    SQLite は既定で外部キー制約を無視するため、接続ごとに有効化します。
    これにより posts_to_categories の ON DELETE CASCADE が機能します。
    """
    module = type(dbapi_connection).__module__
    if not module.startswith('sqlite3'):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()
