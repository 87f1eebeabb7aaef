"""Post CRUD endpoints."""

from extensions import db
from models import User
from forum.models import Category, Post


class TestCreatePost:
    def test_requires_login(self, client):
        resp = client.post('/api/posts', json={"title": "Başlık", "content": "İçerik", "category": "Bilim"})
        assert resp.status_code == 401
        assert resp.get_json()["error_key"] == "unauthorized"

    def test_create(self, app, make_user, client_for):
        user_id = make_user("yazar")
        c = client_for("yazar")

        resp = c.post('/api/posts', json={
            "title": "Yapay Zekâ ve Öğrenme",
            "content": "<p>Merhaba <script>alert(1)</script></p>",
            "category": "Teknoloji",
        })

        assert resp.status_code == 201
        data = resp.get_json()
        assert data["slug"] == "yapay-zeka-ve-ogrenme"
        assert data["category"] == "Teknoloji"
        assert data["author"]["id"] == user_id
        assert data["likesCount"] == 0
        assert "<script>" not in data["content"]

        with app.app_context():
            user = db.session.get(User, user_id)
            assert user.xp == 20
            assert user.total_posts == 1
            assert [badge.badge_id for badge in user.badges] == ["first_post"]

    def test_missing_fields(self, make_user, client_for):
        make_user("yazar")
        resp = client_for("yazar").post('/api/posts', json={"title": "Sadece başlık"})
        assert resp.status_code == 400
        assert resp.get_json()["error_key"] == "post_fields_required"

    def test_invalid_category(self, make_user, client_for):
        make_user("yazar")
        resp = client_for("yazar").post('/api/posts', json={
            "title": "Başlık", "content": "İçerik", "category": "Müzik",
        })
        assert resp.status_code == 400
        assert resp.get_json()["error_key"] == "invalid_category"

    def test_duplicate_slug(self, make_user, client_for):
        make_user("yazar")
        c = client_for("yazar")
        body = {"title": "Aynı Başlık", "content": "İçerik", "category": "Spor"}
        assert c.post('/api/posts', json=body).status_code == 201
        resp = c.post('/api/posts', json=body)
        assert resp.status_code == 400
        assert resp.get_json()["error_key"] == "duplicate_slug"


class TestListAndView:
    def test_list_newest_first(self, client, make_user, make_post):
        author = make_user("yazar")
        make_post(author, "Birinci", category=Category.bilim)
        make_post(author, "İkinci")

        resp = client.get('/api/posts')
        data = resp.get_json()
        assert resp.status_code == 200
        assert [p["title"] for p in data["posts"]] == ["İkinci", "Birinci"]
        assert data["pagination"]["total"] == 2

    def test_filter_by_category(self, client, make_user, make_post):
        author = make_user("yazar")
        make_post(author, "Teknoloji Yazısı")
        resp = client.get('/api/posts?category=Bilim')
        assert resp.get_json()["posts"] == []
        assert client.get('/api/posts?category=Yok').status_code == 400

    def test_view_counts_for_visitors_only(self, app, client, make_user, make_post, client_for):
        author = make_user("yazar")
        post_id = make_post(author, "Görüntülenen Yazı", views=10)

        resp = client.get(f'/api/posts/{post_id}')
        assert resp.status_code == 200
        assert resp.get_json()["views"] == 11
        assert resp.get_json()["isLiked"] is False

        client_for("yazar").get(f'/api/posts/{post_id}')

        with app.app_context():
            assert db.session.get(Post, post_id).views == 11
            assert db.session.get(User, author).total_views == 1

    def test_get_by_slug(self, client, make_user, make_post):
        author = make_user("yazar")
        make_post(author, "Slug ile Erişim")
        resp = client.get('/api/posts/slug/slug-ile-erisim')
        assert resp.status_code == 200
        assert resp.get_json()["title"] == "Slug ile Erişim"

    def test_not_found(self, client):
        assert client.get('/api/posts/999').status_code == 404
        assert client.get('/api/posts/slug/yok').status_code == 404


class TestDeletePost:
    def test_requires_login(self, client, make_user, make_post):
        post_id = make_post(make_user("yazar"), "Silinecek")
        assert client.delete(f'/api/posts/{post_id}').status_code == 401

    def test_not_found(self, make_user, client_for):
        make_user("yazar")
        assert client_for("yazar").delete('/api/posts/42').status_code == 404

    def test_other_user_forbidden(self, app, make_user, make_post, client_for):
        post_id = make_post(make_user("yazar"), "Silinecek")
        make_user("baskasi")
        resp = client_for("baskasi").delete(f'/api/posts/{post_id}')
        assert resp.status_code == 403
        with app.app_context():
            assert db.session.get(Post, post_id) is not None

    def test_author_deletes(self, app, make_user, make_post, client_for):
        author = make_user("yazar")
        liker = make_user("okur")
        post_id = make_post(author, "Silinecek", likers=[liker], commenters=[liker])
        resp = client_for("yazar").delete(f'/api/posts/{post_id}')
        assert resp.status_code == 200
        with app.app_context():
            assert db.session.get(Post, post_id) is None

    def test_delete_after_api_like(self, app, make_user, make_post, client_for):
        post_id = make_post(make_user("yazar"), "Beğenilip Silinecek")
        make_user("okur")
        client_for("okur").post(f'/api/posts/{post_id}/like')

        assert client_for("yazar").delete(f'/api/posts/{post_id}').status_code == 200
        with app.app_context():
            assert db.session.get(Post, post_id) is None

    def test_admin_deletes(self, app, make_user, make_post, client_for):
        post_id = make_post(make_user("yazar"), "Silinecek")
        make_user("yonetici", admin=True)
        assert client_for("yonetici").delete(f'/api/posts/{post_id}').status_code == 200
