"""Featured and trending feeds, categories and featured authors."""

from datetime import timedelta

import pytest

from models import utcnow
from forum.models import Category


@pytest.fixture
def readers(make_user):
    return [make_user(f"okur{i}") for i in range(6)]


class TestFeaturedPosts:
    def test_scores_and_order(self, client, make_user, make_post, readers):
        author = make_user("yazar")
        now = utcnow()
        make_post(author, "Popüler", views=100, likers=readers[:3], commenters=readers[:1],
                  created_at=now - timedelta(days=2))
        make_post(author, "Sakin", views=5, created_at=now - timedelta(days=1))

        posts = client.get('/api/posts/featured').get_json()

        assert [p["title"] for p in posts] == ["Popüler", "Sakin"]
        assert posts[0]["engagement"] == 114
        assert posts[0]["likesCount"] == 3
        assert posts[0]["author"]["name"] == "yazar"

    def test_window_excludes_old_posts(self, client, make_user, make_post):
        author = make_user("yazar")
        make_post(author, "Eski", views=1000, created_at=utcnow() - timedelta(days=31))
        assert client.get('/api/posts/featured').get_json() == []

    def test_limit_and_tie_break(self, client, make_user, make_post):
        author = make_user("yazar")
        ids = [make_post(author, f"Yazı {i}") for i in range(8)]

        posts = client.get('/api/posts/featured').get_json()

        assert [p["id"] for p in posts] == ids[:6]

    def test_excerpt_strips_tags(self, client, make_user, make_post):
        make_post(make_user("yazar"), "Uzun", content="<b>" + "a" * 300 + "</b>")
        excerpt = client.get('/api/posts/featured').get_json()[0]["excerpt"]
        assert excerpt == "a" * 147 + "..."


class TestTrendingPosts:
    def test_recent_bonus(self, client, make_user, make_post, readers):
        author = make_user("yazar")
        now = utcnow()
        make_post(author, "Yeni", views=100, likers=readers[:3], commenters=readers[:1],
                  created_at=now - timedelta(days=2))
        make_post(author, "Eskice", views=150, likers=readers[:3], commenters=readers[:1],
                  created_at=now - timedelta(days=10))

        posts = client.get('/api/posts/trending').get_json()

        assert [(p["title"], p["trendScore"]) for p in posts] == [("Yeni", 175), ("Eskice", 175)]

    def test_bonus_can_outrank_engagement(self, client, make_user, make_post):
        author = make_user("yazar")
        now = utcnow()
        make_post(author, "Dünkü", views=0, created_at=now - timedelta(days=1))
        make_post(author, "Geçen Ay", views=40, created_at=now - timedelta(days=20))

        posts = client.get('/api/posts/trending').get_json()

        assert [p["title"] for p in posts] == ["Dünkü", "Geçen Ay"]
        assert len(posts[0]["excerpt"]) <= 203


class TestCategories:
    def test_only_categories_with_posts(self, client, make_user, make_post):
        author = make_user("yazar")
        make_post(author, "Spor 1", category=Category.spor)
        make_post(author, "Spor 2", category=Category.spor)
        make_post(author, "Bilim 1", category=Category.bilim)

        categories = client.get('/api/categories').get_json()

        assert [(c["name"], c["postCount"]) for c in categories] == [("Bilim", 1), ("Spor", 2)]
        assert categories[0]["icon"] == "Star"
        assert categories[0]["latestPost"].endswith("Z")

    def test_empty(self, client):
        assert client.get('/api/categories').get_json() == []


class TestFeaturedAuthors:
    def test_ranking_and_fields(self, client, make_user, make_post, readers):
        busy = make_user("uretken")
        quiet = make_user("sessiz")
        make_post(busy, "Bir", views=10, likers=readers[:2], commenters=readers[:1])
        make_post(busy, "İki", views=5)
        make_post(quiet, "Tek", views=1)

        authors = client.get('/api/users/featured').get_json()

        assert [a["id"] for a in authors] == [busy, quiet]
        top = authors[0]
        # 10*2 + 5*2 + 15 + 8*1
        assert top["score"] == 53
        assert top["totalPosts"] == 2
        assert top["bio"] == "2 içerik, 2 beğeni"
        assert top["engagementRate"] == 1.5
        assert top["rank"] == "Yeni"

    def test_inactive_authors_excluded(self, client, make_user, make_post):
        author = make_user("eski")
        make_post(author, "Çok Eski", views=500, created_at=utcnow() - timedelta(days=61))
        make_user("hic")
        assert client.get('/api/users/featured').get_json() == []
