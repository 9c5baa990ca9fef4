# tests/test_cli.py
from blog.models import Category, Post


def test_reset_db(runner):
    result = runner.invoke(args=['init', 'reset-db', '--drop-db'])
    assert result.exit_code == 0, result.output
    assert 'データベースの初期化が完了しました。' in result.output


def test_seed_creates_sample_data(app, runner):
    result = runner.invoke(args=['init', 'seed'])
    assert result.exit_code == 0, result.output

    assert Category.query.count() == 2
    assert Post.query.count() == 2
    hello = Post.query.filter_by(slug='hello-world').one()
    assert hello.published is True
    assert [c.name for c in hello.categories] == ['Tech']


def test_seed_is_rerunnable(app, runner):
    runner.invoke(args=['init', 'seed'])
    result = runner.invoke(args=['init', 'seed'])
    assert result.exit_code == 0, result.output
    assert 'スキップしました' in result.output
    assert Category.query.count() == 2
    assert Post.query.count() == 2
