# blog/forms.py

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, BooleanField, SelectMultipleField
from wtforms.validators import DataRequired, Optional

from blog.utils import parse_bool


def coerce_id(value):
    """カテゴリIDを int に変換します。変換できない値は ValueError (フォームエラー) になります。"""
    if value is None or isinstance(value, bool):
        raise ValueError('Invalid id')
    # 1.9 のような小数を 1 に切り捨てない
    if isinstance(value, float) and not value.is_integer():
        raise ValueError('Invalid id')
    try:
        return int(value)
    except TypeError:
        raise ValueError('Invalid id')


def supplied(field):
    """フィールドがリクエストに含まれていたか (JSON の null は未指定として扱う)"""
    return bool(field.raw_data) and field.raw_data[0] is not None


class CategoryIdsField(SelectMultipleField):
    """カテゴリIDのリスト。JSON の null は未指定として空リストにします。"""

    def __init__(self, label=None, validators=None, **kwargs):
        kwargs.setdefault('coerce', coerce_id)
        kwargs.setdefault('validate_choice', False)
        super().__init__(label, validators, **kwargs)

    def process_formdata(self, valuelist):
        if valuelist == [None]:
            valuelist = []
        super().process_formdata(valuelist)


class StrictBooleanField(BooleanField):
    """true / false 以外の値 (例: "nope") をフォームエラーにする BooleanField"""

    def process_formdata(self, valuelist):
        if not valuelist or valuelist[0] is None:
            self.data = False
            return
        value = valuelist[0]
        if not isinstance(value, (bool, str)):
            raise ValueError('true / false で指定してください。')
        try:
            self.data = bool(parse_bool(value))
        except ValueError:
            self.data = False
            raise ValueError('true / false で指定してください。')


class ApiForm(FlaskForm):
    """JSON API 用のフォーム基底クラス (CSRFトークンは使わない)"""

    class Meta:
        csrf = False


class PostForm(ApiForm):
    """投稿作成フォーム"""
    title = StringField('タイトル', validators=[DataRequired(message='タイトルは必須です。')])
    content = TextAreaField('本文', validators=[DataRequired(message='本文は必須です。')])
    published = StrictBooleanField('公開する')
    category_ids = CategoryIdsField('カテゴリ')


class PostUpdateForm(ApiForm):
    """投稿編集フォーム (指定されたフィールドだけを更新する)"""
    title = StringField('タイトル', validators=[Optional()])
    content = TextAreaField('本文', validators=[Optional()])
    published = StrictBooleanField('公開する')
    category_ids = CategoryIdsField('カテゴリ')


class PostCategoriesForm(ApiForm):
    """投稿のカテゴリ置き換えフォーム"""
    category_ids = CategoryIdsField('カテゴリ')


class CategoryForm(ApiForm):
    """カテゴリ作成フォーム"""
    name = StringField('カテゴリ名', validators=[DataRequired(message='カテゴリ名は必須です。')])
    description = TextAreaField('説明', validators=[Optional()])


class CategoryUpdateForm(ApiForm):
    """カテゴリ編集フォーム"""
    name = StringField('カテゴリ名', validators=[Optional()])
    description = TextAreaField('説明', validators=[Optional()])
