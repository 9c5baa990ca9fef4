# blog/services/__init__.py
"""
投稿・カテゴリのストア、関連管理、一覧クエリ。

ルートからもCLIからもここを経由してデータベースを操作します。
"""
