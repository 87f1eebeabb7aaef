# users.py
from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from sqlalchemy import func

from decorators import admin_required
from extensions import db
from models import THEMES, User, UserRole
from utils import error_response, iso, user_brief
from forum.feeds import featured_authors, post_counters, post_summary
from forum.models import Post
from gamification.service import gamification_summary

users_bp = Blueprint('users', __name__)

PROFILE_POST_LIMIT = 10

# Alan adı -> en fazla karakter
PROFILE_TEXT_LIMITS = {
    'bio': 500,
    'location': 100,
    'website': 200,
    'image': 512,
}


def profile_payload(user, include_private=False):
    data = {
        **user_brief(user),
        "role": user.role.value,
        "bio": user.bio,
        "location": user.location,
        "website": user.website,
        "joinedAt": iso(user.created_at),
        **gamification_summary(user),
    }
    if not include_private:
        data.pop("email")
    else:
        data["preferences"] = {
            "theme": user.theme,
            "notifications": {"email": user.notify_email, "push": user.notify_push},
        }
    return data

@users_bp.route('/users/featured', methods=['GET'])
def get_featured_authors():
    try:
        return jsonify(featured_authors())
    except Exception as e:
        current_app.logger.error(f"Önerilen yazarlar listeleme hatası: {e}")
        return error_response("featured_authors_error", "Önerilen yazarlar listelenirken bir hata oluştu", 500)

@users_bp.route('/users/<int:user_id>', methods=['GET'])
def get_user_profile(user_id):
    user = db.session.get(User, user_id)
    if not user or user.status == 'deleted':
        return error_response("user_not_found", "Kullanıcı bulunamadı", 404)

    likes_count, _, comments_count = post_counters()
    rows = (
        db.session.query(Post, likes_count, comments_count)
        .filter(Post.user_id == user.id)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .all()
    )

    # Profil sayfasındaki toplamlar gönderilerin kendisinden hesaplanır.
    data = profile_payload(user, include_private=current_user.is_authenticated and current_user.id == user.id)
    data["postTotals"] = {
        "posts": len(rows),
        "likes": sum(int(likes or 0) for _, likes, _ in rows),
        "comments": sum(int(comments or 0) for _, _, comments in rows),
    }
    data["posts"] = [post_summary(post, user, likes, comments) for post, likes, comments in rows[:PROFILE_POST_LIMIT]]
    return jsonify(data)

@users_bp.route('/users/me', methods=['GET'])
@login_required
def get_own_profile():
    return jsonify(profile_payload(current_user, include_private=True))

@users_bp.route('/users/me', methods=['PUT'])
@login_required
def update_own_profile():
    data = request.get_json(silent=True) or {}

    if 'name' in data:
        name = (data.get('name') or '').strip()
        if not 2 <= len(name) <= 50:
            return error_response("invalid_name", "İsim 2-50 karakter uzunluğunda olmalıdır", 400)
        taken = User.query.filter(func.lower(User.name) == name.lower(), User.id != current_user.id).first()
        if taken:
            return error_response("name_taken", "Bu isim zaten kullanılıyor", 400)
        current_user.name = name

    for field, limit in PROFILE_TEXT_LIMITS.items():
        if field not in data:
            continue
        value = (data.get(field) or '').strip()
        if len(value) > limit:
            return error_response(f"{field}_too_long", f"'{field}' en fazla {limit} karakter olabilir", 400)
        setattr(current_user, field, value or (None if field == 'image' else ''))

    if 'theme' in data:
        if data['theme'] not in THEMES:
            return error_response("invalid_theme", "Geçersiz tema seçimi", 400)
        current_user.theme = data['theme']

    notifications = data.get('notifications')
    if isinstance(notifications, dict):
        if 'email' in notifications:
            current_user.notify_email = bool(notifications['email'])
        if 'push' in notifications:
            current_user.notify_push = bool(notifications['push'])

    try:
        db.session.commit()
        return jsonify(profile_payload(current_user, include_private=True))
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Profil güncellenirken hata: {e}")
        return error_response("profile_update_error", "Profil güncellenirken bir hata oluştu", 500)

@users_bp.route('/admin/users/<int:user_id>/role', methods=['PUT'])
@login_required
@admin_required
def change_role(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return error_response("user_not_found", "Kullanıcı bulunamadı", 404)

    data = request.get_json(silent=True) or {}
    try:
        new_role = UserRole(data.get('role'))
    except ValueError:
        return error_response("invalid_role", "Geçersiz rol", 400)

    try:
        old_role = user.role.value
        user.role = new_role
        db.session.commit()
        current_app.logger.info(f"Admin {current_user.name}, kullanıcı {user.name} rolünü '{old_role}' -> '{new_role.value}' olarak değiştirdi.")
        return jsonify({"success": True, "id": user.id, "role": user.role.value})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Rol değiştirilirken kritik hata: {e}")
        return error_response("role_change_error", "Rol değiştirilirken bir hata oluştu", 500)
