# tests/test_query.py
import pytest

from blog.errors import ValidationError
from blog.services.query import query_posts


@pytest.fixture
def twenty_five_posts(make_post):
    """25件の投稿 (戻り値は新しい順)"""
    posts = [make_post(f'Post {i:02d}', f'Body number {i}') for i in range(25)]
    return list(reversed(posts))


def ids(posts):
    return [post.id for post in posts]


def test_pagination_windows(app, twenty_five_posts):
    expected = ids(twenty_five_posts)

    page1 = query_posts(page=1, page_size=6)
    assert ids(page1.items) == expected[0:6]
    assert page1.total_count == 25

    page5 = query_posts(page=5, page_size=6)
    assert ids(page5.items) == expected[24:25]
    assert page5.total_count == 25

    page6 = query_posts(page=6, page_size=6)
    assert page6.items == []
    assert page6.total_count == 25
    assert page6.page == 6


def test_page_metadata(app, twenty_five_posts):
    result = query_posts(page=2, page_size=6)
    assert result.total_pages == 5
    assert result.has_prev is True
    assert result.has_next is True

    data = result.to_dict()
    assert data['total_count'] == 25
    assert data['page'] == 2
    assert data['page_size'] == 6
    assert len(data['items']) == 6


def test_default_page_size_comes_from_config(app, twenty_five_posts):
    result = query_posts()
    assert result.page_size == app.config['POSTS_PER_PAGE']
    assert len(result.items) == app.config['POSTS_PER_PAGE']


def test_page_size_is_capped(app, make_post):
    app.config['MAX_PAGE_SIZE'] = 3
    for i in range(5):
        make_post(f'Post {i}')
    result = query_posts(page_size=50)
    assert result.page_size == 3
    assert len(result.items) == 3


@pytest.mark.parametrize('page, page_size', [(0, 6), (-1, 6), (1, 0), ('1', 6)])
def test_invalid_paging_arguments(app, page, page_size):
    with pytest.raises(ValidationError):
        query_posts(page=page, page_size=page_size)


def test_newest_first_with_id_tiebreak(app, make_post):
    from blog.extensions import db
    from datetime import datetime

    first = make_post('First')
    second = make_post('Second')
    same_time = datetime(2026, 1, 1, 12, 0, 0)
    first.created_at = same_time
    second.created_at = same_time
    db.session.commit()

    assert ids(query_posts().items) == [second.id, first.id]


def test_search_is_case_insensitive_on_title_and_content(app, make_post):
    report = make_post('Go Report', 'quarterly numbers')
    other = make_post('Unrelated', 'nothing to see')
    body_match = make_post('Another', 'This mentions the REPORT in the body')

    for term in ['go', 'GO', 'Report']:
        assert report.id in ids(query_posts(search=term).items)

    found = ids(query_posts(search='report').items)
    assert set(found) == {report.id, body_match.id}
    assert other.id not in found
    assert query_posts(search='report').total_count == 2


def test_search_escapes_like_wildcards(app, make_post):
    make_post('Discount 1000', 'plain')
    percent = make_post('Discount 100%', 'plain')
    assert ids(query_posts(search='100%').items) == [percent.id]
    assert query_posts(search='_').total_count == 0


def test_blank_search_is_ignored(app, make_post):
    make_post('One')
    make_post('Two')
    assert query_posts(search='   ').total_count == 2


def test_published_filter(app, make_post):
    published = make_post('Published', published=True)
    draft = make_post('Draft', published=False)

    assert ids(query_posts(published=True).items) == [published.id]
    assert ids(query_posts(published=False).items) == [draft.id]
    assert query_posts().total_count == 2


def test_category_filter_combined_with_other_filters(app, make_category, make_post):
    tech = make_category('Tech')
    life = make_category('Life')
    a = make_post('Tech published', published=True, category_ids=[tech.id])
    make_post('Tech draft', published=False, category_ids=[tech.id])
    make_post('Life published', published=True, category_ids=[life.id])
    d = make_post('Both published', published=True, category_ids=[tech.id, life.id])

    result = query_posts(category_id=tech.id, published=True)
    assert ids(result.items) == [d.id, a.id]
    assert result.total_count == 2

    result = query_posts(category_id=tech.id, search='both')
    assert ids(result.items) == [d.id]


def test_category_filter_unknown_category_is_empty(app, make_post):
    make_post('Anything')
    result = query_posts(category_id=999)
    assert result.items == []
    assert result.total_count == 0


def test_items_carry_categories(app, make_category, make_post):
    tech = make_category('Tech')
    life = make_category('Life')
    make_post('Post', category_ids=[life.id, tech.id])

    item = query_posts().items[0].to_dict()
    assert [link['category']['name'] for link in item['categories']] == ['Tech', 'Life']


def test_example_scenario(app, make_category):
    """Tech カテゴリ + 'Hello, World!' の一連のシナリオ"""
    from blog.services import post_store

    tech = make_category('Tech')
    assert tech.slug == 'tech'

    post = post_store.create_post('Hello, World!', 'word ' * 250, category_ids=[tech.id])
    assert post.published is False
    assert post.word_count == 250
    assert post.reading_time == 2

    assert query_posts(published=True).items == []

    drafts = query_posts(published=False)
    assert ids(drafts.items) == [post.id]
    categories = drafts.items[0].to_dict()['categories']
    assert [link['category']['name'] for link in categories] == ['Tech']
