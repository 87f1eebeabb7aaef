"""Shared test fixtures."""

import itertools

import pytest

from app import create_app
from config import Config
from extensions import db
from models import User, UserRole, utcnow
from utils import slugify
from forum.models import Category, Comment, Like, Post

PASSWORD = "Parola!123"


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-anahtari'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user named ``name`` with e-mail ``<name>@example.com``; returns its id."""
    counter = itertools.count(1)

    def _make_user(name=None, password=PASSWORD, admin=False, **fields):
        name = name or f"kullanici{next(counter)}"
        with app.app_context():
            user = User(name=name, email=f"{name.lower()}@example.com", **fields)
            user.set_password(password)
            if admin:
                user.role = UserRole.admin
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture
def client_for(app):
    """A fresh test client logged in as ``name``."""

    def _client_for(name, password=PASSWORD):
        c = app.test_client()
        resp = c.post('/login', json={'email': f"{name.lower()}@example.com", 'password': password})
        assert resp.status_code == 200, resp.get_json()
        return c

    return _client_for


@pytest.fixture
def make_post(app):
    """Insert a post directly with the given counters; returns its id."""

    def _make_post(author_id, title, content="Örnek içerik", category=Category.teknoloji,
                   created_at=None, views=0, likers=(), commenters=()):
        with app.app_context():
            post = Post(
                title=title,
                slug=slugify(title),
                content=content,
                category=category,
                user_id=author_id,
                views=views,
                created_at=created_at or utcnow(),
            )
            db.session.add(post)
            db.session.flush()
            for user_id in likers:
                db.session.add(Like(user_id=user_id, post_id=post.id))
            for user_id in commenters:
                db.session.add(Comment(content="Güzel yazı", user_id=user_id, post_id=post.id))
            db.session.commit()
            return post.id

    return _make_post
