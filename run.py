# run.py

from blog import create_app
from config import Config  # Configをインポート

# Flaskアプリケーションのインスタンスを作成
app = create_app(Config)

if __name__ == '__main__':
    # host='0.0.0.0' で、外部からのアクセスを許可する
    app.run(host='0.0.0.0', port=5001)
