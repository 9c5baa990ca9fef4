# blog/routes/posts.py

from flask import Blueprint, jsonify, request

from blog.errors import ValidationError
from blog.forms import PostForm, PostUpdateForm, PostCategoriesForm, supplied
from blog.routes import get_json_payload, form_errors, published_arg, check_json_bool
from blog.services import post_store, relationships
from blog.services.query import query_posts
from blog.utils import render_markdown

# posts Blueprint の定義 (JSON API)
posts_bp = Blueprint('posts', __name__, url_prefix='/api/posts')


# --- 投稿一覧 (絞り込みのみ、ページングなし) ---
@posts_bp.route('', methods=['GET'])
def list_posts():
    posts = post_store.list_posts(
        category_id=request.args.get('category_id', type=int),
        published=published_arg(),
    )
    return jsonify([post.to_dict() for post in posts])


# --- 絞り込み・検索・ページング ---
@posts_bp.route('/query', methods=['GET'])
def query():
    page = request.args.get('page', 1, type=int)
    page_size = request.args.get('page_size', type=int)
    result = query_posts(
        category_id=request.args.get('category_id', type=int),
        published=published_arg(),
        search=request.args.get('q'),
        page=page,
        page_size=page_size,
    )
    return jsonify(result.to_dict())


@posts_bp.route('/slug/<slug>', methods=['GET'])
def get_post_by_slug(slug):
    post = post_store.get_post_by_slug(slug)
    data = post.to_dict()
    data['content_html'] = render_markdown(post.content)
    return jsonify(data)


@posts_bp.route('/<int:post_id>', methods=['GET'])
def get_post(post_id):
    return jsonify(post_store.get_post(post_id).to_dict())


@posts_bp.route('', methods=['POST'])
def create_post():
    payload = get_json_payload()
    check_json_bool(payload, 'published')
    form = PostForm()
    if not form.validate_on_submit():
        raise form_errors(form)

    post = post_store.create_post(
        title=form.title.data,
        content=form.content.data,
        published=form.published.data if supplied(form.published) else False,
        category_ids=form.category_ids.data,
    )
    return jsonify(post.to_dict()), 201


@posts_bp.route('/<int:post_id>', methods=['PATCH', 'PUT'])
def update_post(post_id):
    payload = get_json_payload()
    check_json_bool(payload, 'published')
    form = PostUpdateForm()
    if not form.validate_on_submit():
        raise form_errors(form)

    # JSON の空リストはフォームデータ上では欠落と区別できないため、キーの値で判定する (null は未指定)
    if payload is not None:
        category_ids_supplied = payload.get('category_ids') is not None
    else:
        category_ids_supplied = supplied(form.category_ids)

    post = post_store.update_post(
        post_id,
        title=form.title.data if supplied(form.title) else None,
        content=form.content.data if supplied(form.content) else None,
        published=form.published.data if supplied(form.published) else None,
        category_ids=form.category_ids.data if category_ids_supplied else None,
    )
    return jsonify(post.to_dict())


@posts_bp.route('/<int:post_id>', methods=['DELETE'])
def delete_post(post_id):
    post_store.delete_post(post_id)
    return jsonify({'success': True})


# --- カテゴリの関連付けを丸ごと置き換える ---
@posts_bp.route('/<int:post_id>/categories', methods=['PUT'])
def set_post_categories(post_id):
    payload = get_json_payload()
    form = PostCategoriesForm()
    if not form.validate_on_submit():
        raise form_errors(form)
    if payload is not None and payload.get('category_ids') is None:
        raise ValidationError('category_ids は必須です。', {'category_ids': ['required']})

    post = relationships.set_categories(post_id, form.category_ids.data)
    return jsonify(post.to_dict())
