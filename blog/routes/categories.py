# blog/routes/categories.py

from flask import Blueprint, jsonify

from blog.forms import CategoryForm, CategoryUpdateForm, supplied
from blog.routes import get_json_payload, form_errors
from blog.services import category_store

# categories_bp ブループリントを定義 (JSON API)
categories_bp = Blueprint('categories', __name__, url_prefix='/api/categories')


# カテゴリ一覧 (各カテゴリに関連付いた投稿数を含む)
@categories_bp.route('', methods=['GET'])
def list_categories():
    return jsonify([
        dict(category.to_dict(), post_count=post_count)
        for category, post_count in category_store.list_categories_with_post_counts()
    ])


@categories_bp.route('/<int:category_id>', methods=['GET'])
def get_category(category_id):
    return jsonify(category_store.get_category(category_id).to_dict())


@categories_bp.route('/slug/<slug>', methods=['GET'])
def get_category_by_slug(slug):
    return jsonify(category_store.get_category_by_slug(slug).to_dict())


@categories_bp.route('', methods=['POST'])
def create_category():
    get_json_payload()
    form = CategoryForm()
    if not form.validate_on_submit():
        raise form_errors(form)

    category = category_store.create_category(
        name=form.name.data,
        description=form.description.data if supplied(form.description) else None,
    )
    return jsonify(category.to_dict()), 201


@categories_bp.route('/<int:category_id>', methods=['PATCH', 'PUT'])
def update_category(category_id):
    get_json_payload()
    form = CategoryUpdateForm()
    if not form.validate_on_submit():
        raise form_errors(form)

    category = category_store.update_category(
        category_id,
        name=form.name.data if supplied(form.name) else None,
        description=form.description.data if supplied(form.description) else None,
    )
    return jsonify(category.to_dict())


@categories_bp.route('/<int:category_id>', methods=['DELETE'])
def delete_category(category_id):
    category_store.delete_category(category_id)
    return jsonify({'success': True})
