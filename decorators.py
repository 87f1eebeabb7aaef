# decorators.py

from functools import wraps
from flask import current_app
from flask_login import current_user

from utils import error_response

def admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return error_response("unauthorized", "Bu işlem için giriş yapmalısınız", 401)
        if not current_user.is_admin:
            current_app.logger.warning(f"Yetkisiz admin erişim denemesi: {current_user.name}")
            return error_response("forbidden", "Bu işlem için yetkiniz yok", 403)
        return f(*args, **kwargs)
    return decorated_function
