"""Admin promotion script."""

from extensions import db
from models import User, UserRole
from make_admin import set_user_role


class TestSetUserRole:
    def test_promotes_by_email(self, app, make_user):
        user_id = make_user("ali")
        with app.app_context():
            assert set_user_role("ALI@example.com") is True
            assert db.session.get(User, user_id).role == UserRole.admin

    def test_unknown_email(self, app):
        with app.app_context():
            assert set_user_role("yok@example.com") is False

    def test_already_admin(self, app, make_user):
        make_user("yonetici", admin=True)
        with app.app_context():
            assert set_user_role("yonetici@example.com") is True
