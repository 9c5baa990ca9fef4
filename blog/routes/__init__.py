# blog/routes/__init__.py
"""API ブループリント共通のリクエスト処理ヘルパー。"""

from flask import request

from blog.errors import ValidationError
from blog.utils import parse_bool


def get_json_payload():
    """
    JSON ボディを dict として返します。JSON 以外のリクエストでは None。
    JSON だがオブジェクトでない場合は ValidationError。
    """
    if not request.is_json:
        return None
    payload = request.get_json()
    if not isinstance(payload, dict):
        raise ValidationError('JSONオブジェクトを送信してください。')
    return payload


def form_errors(form):
    return ValidationError('入力内容に誤りがあります。', form.errors)


def published_arg():
    """クエリ文字列の published を bool / None に変換します。"""
    try:
        return parse_bool(request.args.get('published'))
    except ValueError:
        raise ValidationError(
            'published は true / false で指定してください。',
            {'published': ['not_a_boolean']}
        )


def check_json_bool(payload, name):
    """JSON ボディの真偽値フィールドが true / false (または null) であることを確認します。"""
    if payload is None:
        return
    value = payload.get(name)
    if value is not None and not isinstance(value, bool):
        raise ValidationError(
            f'{name} は true / false で指定してください。',
            {name: ['not_a_boolean']}
        )
