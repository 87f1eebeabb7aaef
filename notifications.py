# notifications.py
import math

from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user

from extensions import db
from models import Notification, NotificationType, User
from utils import error_response, iso, user_brief
from forum.models import Post

notifications_bp = Blueprint('notifications', __name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def parse_id(value):
    """JSON'dan gelen kimliği tamsayıya çevirir; geçersizse None döner."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None

def notification_payload(notification):
    post = notification.post
    return {
        "id": notification.id,
        "type": notification.type.value,
        "message": notification.message,
        "isRead": notification.is_read,
        "createdAt": iso(notification.created_at),
        "sender": user_brief(notification.sender) if notification.sender else None,
        "post": {"id": post.id, "title": post.title, "slug": post.slug} if post else None,
    }

@notifications_bp.route('/notifications', methods=['GET'])
@login_required
def list_notifications():
    """Kullanıcının bildirimlerini en yeniden eskiye sayfalı olarak döndürür."""
    page = max(request.args.get('page', 1, type=int), 1)
    limit = min(max(request.args.get('limit', DEFAULT_PAGE_SIZE, type=int), 1), MAX_PAGE_SIZE)
    unread_only = request.args.get('unreadOnly') == 'true'

    query = Notification.query.filter_by(recipient_id=current_user.id)
    if unread_only:
        query = query.filter_by(is_read=False)

    total = query.count()
    notifications = (
        query.order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    unread_count = Notification.query.filter_by(recipient_id=current_user.id, is_read=False).count()

    return jsonify({
        "notifications": [notification_payload(n) for n in notifications],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        },
        "unreadCount": unread_count,
    })

@notifications_bp.route('/notifications', methods=['POST'])
@login_required
def create_notification():
    data = request.get_json(silent=True) or {}
    recipient_id = data.get('recipient')
    type_value = data.get('type')
    message = (data.get('message') or '').strip()
    post_id = data.get('post')

    if recipient_id is None or not type_value or not message:
        return error_response("notification_fields_required", "Alıcı, tür ve mesaj alanları zorunludur", 400)

    recipient_id = parse_id(recipient_id)
    if recipient_id is None:
        return error_response("invalid_recipient", "Geçersiz alıcı", 400)

    # Kendi kendine bildirim göndermeyi engelle
    if recipient_id == current_user.id:
        return error_response("self_notification", "Kendi kendinize bildirim gönderemezsiniz", 400)

    try:
        notification_type = NotificationType(type_value)
    except ValueError:
        return error_response("invalid_notification_type", "Geçersiz bildirim türü", 400)

    if len(message) > 255:
        return error_response("notification_message_too_long", "Mesaj en fazla 255 karakter olabilir", 400)

    recipient = db.session.get(User, recipient_id)
    if not recipient:
        return error_response("recipient_not_found", "Alıcı bulunamadı", 404)

    post_id = parse_id(post_id)
    if post_id is not None and db.session.get(Post, post_id) is None:
        return error_response("post_not_found", "Gönderi bulunamadı", 404)

    try:
        notification = Notification(
            recipient_id=recipient.id,
            sender_id=current_user.id,
            type=notification_type,
            message=message,
            post_id=post_id,
        )
        db.session.add(notification)
        db.session.commit()
        return jsonify(notification_payload(notification)), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Bildirim oluşturulamadı: {e}")
        return error_response("notification_create_error", "Bildirim oluşturulamadı", 500)

@notifications_bp.route('/notifications/<int:notification_id>/read', methods=['PUT'])
@login_required
def mark_notification_read(notification_id):
    notification = Notification.query.filter_by(id=notification_id, recipient_id=current_user.id).first()
    if not notification:
        return error_response("notification_not_found", "Bildirim bulunamadı", 404)

    try:
        notification.is_read = True
        db.session.commit()
        return jsonify(notification_payload(notification))
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Bildirim güncellenemedi: {e}")
        return error_response("notification_update_error", "Bildirim güncellenemedi", 500)

@notifications_bp.route('/notifications/read-all', methods=['POST'])
@login_required
def mark_all_notifications_read():
    try:
        modified = (
            Notification.query
            .filter_by(recipient_id=current_user.id, is_read=False)
            .update({"is_read": True})
        )
        db.session.commit()
        return jsonify({
            "message": "Tüm bildirimler okundu olarak işaretlendi",
            "modifiedCount": modified,
        })
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Bildirimler güncellenemedi: {e}")
        return error_response("notification_update_error", "Bildirimler güncellenemedi", 500)
