# blog/routes/home.py

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException
import logging

from blog.errors import BlogError
from blog.extensions import db
from blog.routes import get_json_payload
from blog.services.dashboard import dashboard_summary
from blog.utils import render_markdown

logger = logging.getLogger(__name__)

# ブループリントの定義
home_bp = Blueprint('home', __name__, url_prefix='/api')


# ダッシュボード (投稿数・公開数・下書き数・カテゴリ・最新記事)
@home_bp.route('/dashboard', methods=['GET'])
def dashboard():
    return jsonify(dashboard_summary())


# エディタのプレビュー用に Markdown を HTML に変換する
@home_bp.route('/markdown/preview', methods=['POST'])
def markdown_preview():
    payload = get_json_payload()
    if payload is not None:
        content = payload.get('content') or ''
    else:
        content = request.form.get('content', '')
    if not isinstance(content, str):
        content = str(content)
    return jsonify({'html': render_markdown(content)})


# --- エラーハンドリング ---
@home_bp.app_errorhandler(BlogError)
def handle_blog_error(e):
    if e.status_code >= 500:
        current_app.logger.error(f"BLOG_ERROR: {e.message}", exc_info=True)
    return jsonify(e.to_dict()), e.status_code


@home_bp.app_errorhandler(HTTPException)
def handle_http_error(e):
    if e.code == 404:
        current_app.logger.warning(f"PAGE_NOT_FOUND: {request.path}")
    return jsonify({'error': e.name.lower().replace(' ', '_'), 'message': e.description}), e.code


@home_bp.app_errorhandler(500)
def internal_server_error(e):
    db.session.rollback()
    current_app.logger.exception(f"INTERNAL_SERVER_ERROR: {e}")
    return jsonify({'error': 'internal_server_error', 'message': 'サーバー内部でエラーが発生しました。'}), 500
