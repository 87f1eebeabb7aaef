# utils.py
import re
import unicodedata

import bleach
from flask import current_app, jsonify

from extensions import db
from models import Notification, NotificationType

# Ayrıştırılamayan Türkçe harflerin (ı, İ) ve diğerlerinin URL dostu karşılıkları
TURKISH_CHARS = str.maketrans({
    'ç': 'c', 'Ç': 'c', 'ğ': 'g', 'Ğ': 'g', 'ı': 'i', 'I': 'i', 'İ': 'i',
    'ö': 'o', 'Ö': 'o', 'ş': 's', 'Ş': 's', 'ü': 'u', 'Ü': 'u',
})

def slugify(text):
    """Başlıktan URL dostu, küçük harfli ve tireli bir kısa ad üretir."""
    text = str(text).translate(TURKISH_CHARS)
    # Aksanlı harfleri temel harfe indir (é -> e, â -> a)
    text = unicodedata.normalize('NFKD', text)
    text = ''.join(ch for ch in text if not unicodedata.combining(ch))
    text = text.lower().strip()
    text = re.sub(r'\s+', '-', text)          # Boşlukları tire ile değiştir
    text = re.sub(r'[^a-z0-9\-]+', '', text)  # Alfanumerik olmayan karakterleri kaldır
    text = re.sub(r'-{2,}', '-', text)        # Birden fazla tireyi tek tireye dönüştür
    return text.strip('-')

def strip_tags(html):
    return bleach.clean(html or '', tags=set(), attributes={}, strip=True)

def make_excerpt(content, length):
    """İçeriğin ilk `length` karakterini HTML etiketlerinden arındırarak döndürür."""
    content = content or ''
    if len(content) > length:
        return strip_tags(content[:length]) + '...'
    return strip_tags(content)

def iso(dt):
    return dt.isoformat() + "Z" if dt else None

def user_brief(user):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "image": user.image,
    }

def error_response(error_key, message, status):
    return jsonify({"error_key": error_key, "message": message}), status

def send_notification(recipient_id, sender_id, notification_type, message, post_id=None):
    """
    Beğeni ve yorum gibi işlemlerin ardından bildirim oluşturur.
    Hata olursa sadece loglanır; asıl işlem bundan etkilenmez.
    """
    if recipient_id == sender_id:
        return None
    try:
        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=NotificationType(notification_type),
            message=message,
            post_id=post_id,
        )
        db.session.add(notification)
        db.session.commit()
        return notification
    except Exception as e:
        current_app.logger.error(f"Bildirim gönderilemedi (Alıcı: {recipient_id}): {e}")
        db.session.rollback()
        return None
