# blog/errors.py
"""
ストア層が送出する例外の定義。

ルート側では BlogError をまとめて JSON エラーレスポンスに変換します
(blog/routes/home.py の app_errorhandler を参照)。
"""


class BlogError(Exception):
    status_code = 500
    code = 'error'

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        payload = {'error': self.code, 'message': self.message}
        if self.details is not None:
            payload['details'] = self.details
        return payload


class ValidationError(BlogError):
    """必須項目の欠落・空文字など、入力値が不正な場合。"""
    status_code = 400
    code = 'validation_error'


class NotFound(BlogError):
    """id / slug が存在しない場合。"""
    status_code = 404
    code = 'not_found'


class Conflict(BlogError):
    """スラッグが既存のレコードと衝突した場合。"""
    status_code = 409
    code = 'conflict'


class IntegrityError(ValidationError):
    """存在しないカテゴリIDが関連付けに指定された場合。"""
    code = 'integrity_error'
