import re
import uuid
import logging

from dotenv import load_dotenv
load_dotenv()

from flask import Flask, Blueprint, request, jsonify, url_for, current_app
from flask_login import current_user, login_user, logout_user, login_required
from flask_wtf.csrf import generate_csrf
from sqlalchemy import func, or_
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from config import Config
from extensions import csrf, db, limiter, login_manager, migrate, oauth
from models import User
import forum.models
from utils import error_response
from forum.routes import forum_bp
from users import users_bp, profile_payload
from notifications import notifications_bp

logging.basicConfig(
    filename=Config.LOG_FILE,
    level=logging.INFO,
    format='[%(asctime)s] - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MIN_PASSWORD_LENGTH = 8

auth_bp = Blueprint('auth', __name__)


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))

@login_manager.unauthorized_handler
def unauthorized():
    return error_response("unauthorized", "Bu işlem için giriş yapmalısınız", 401)


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("15 per hour")
def register():
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    # Zorunlu alan kontrolü
    if not all([name, email, password]):
        return error_response("register_fields_required", "İsim, e-posta ve şifre alanları zorunludur", 400)

    if not 2 <= len(name) <= 50:
        return error_response("invalid_name", "İsim 2-50 karakter uzunluğunda olmalıdır", 400)

    if len(email) > 120 or not EMAIL_PATTERN.match(email):
        return error_response("invalid_email", "Geçerli bir e-posta adresi giriniz", 400)

    if len(password) < MIN_PASSWORD_LENGTH:
        return error_response("weak_password", f"Şifre en az {MIN_PASSWORD_LENGTH} karakter uzunluğunda olmalıdır", 400)

    # E-posta ve isim benzersizlik kontrolü
    if User.query.filter(User.email == email).first():
        return error_response("email_taken", "Bu e-posta adresi zaten kullanılıyor", 400)

    if User.query.filter(func.lower(User.name) == name.lower()).first():
        return error_response("name_taken", "Bu isim zaten kullanılıyor", 400)

    try:
        new_user = User(name=name, email=email, status='active')
        new_user.set_password(password)
        db.session.add(new_user)
        db.session.commit()
        current_app.logger.info(f"Yeni kullanıcı kaydı: {new_user.name} ({new_user.email})")
        return jsonify({
            "message": "Hesabınız başarıyla oluşturuldu",
            "user": profile_payload(new_user, include_private=True),
        }), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Kayıt sırasında veritabanı hatası: {e}")
        return error_response("register_error", "Hesap oluşturulurken beklenmedik bir hata oluştu", 500)

@auth_bp.route('/login', methods=['POST'])
@limiter.limit("5 per minute")
def login():
    data = request.get_json(silent=True) or {}
    identifier = (data.get('email') or '').strip()
    password = data.get('password') or ''

    if not identifier or not password:
        return error_response("login_fields_required", "E-posta ve şifre gereklidir", 400)

    user = User.query.filter(or_(User.email == identifier.lower(), func.lower(User.name) == identifier.lower())).first()

    if not user or not user.check_password(password):
        current_app.logger.warning(f"Hatalı giriş denemesi: {identifier} IP -> {request.remote_addr}")
        return error_response("invalid_credentials", "E-posta veya şifre hatalı", 401)

    if user.status == 'deleted':
        current_app.logger.warning(f"Silinmiş hesapla giriş denemesi: {identifier}")
        return error_response("account_deleted", "Bu hesap silinmiştir", 403)

    login_user(user, remember=True)
    current_app.logger.info(f"'{user.name}' başarıyla giriş yaptı.")
    return jsonify({"message": "Giriş başarılı", "user": profile_payload(user, include_private=True)})

@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    current_app.logger.info(f"'{current_user.name}' güvenli çıkış yaptı.")
    logout_user()
    return jsonify({"message": "Çıkış yapıldı"})

@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify(profile_payload(current_user, include_private=True))

@auth_bp.route('/csrf-token', methods=['GET'])
def csrf_token():
    return jsonify({"csrfToken": generate_csrf()})

@auth_bp.route('/google/login')
def google_login():
    redirect_uri = url_for('auth.google_auth', _external=True)
    return oauth.google.authorize_redirect(redirect_uri)

@auth_bp.route('/google/auth')
def google_auth():
    try:
        token = oauth.google.authorize_access_token()
        userinfo = token.get('userinfo')
        if not userinfo:
            raise ValueError("Kullanıcı bilgisi (userinfo) token içinde bulunamadı.")
    except Exception as e:
        current_app.logger.error(f"Google Auth error: {e}")
        return error_response("google_auth_error", "Google ile kimlik doğrulama sırasında bir hata oluştu", 400)

    email = (userinfo.get('email') or '').lower()
    google_id = userinfo.get('sub')
    if not email:
        return error_response("google_email_missing", "Google hesabınızdan e-posta bilgisi alınamadı", 400)

    user = User.query.filter_by(google_id=google_id).first() if google_id else None
    if user is None:
        user = User.query.filter_by(email=email).first()

    if user:
        if user.status == 'deleted':
            return error_response("account_deleted", "Bu hesap silinmiştir", 403)
        # Daha önce şifreyle kayıt olmuş hesabı Google hesabına bağla.
        if not user.google_id:
            user.google_id = google_id
        if not user.image:
            user.image = userinfo.get('picture')
        db.session.commit()
        current_app.logger.info(f"Google Login (Mevcut Kullanıcı): '{user.name}'")
    else:
        current_app.logger.info(f"Google Login (Yeni Kullanıcı): '{email}' için otomatik kayıt başlıyor.")

        # Benzersiz isim oluştur
        base_name = (userinfo.get('name') or 'kullanici').strip()[:40] or 'kullanici'
        new_name = base_name
        while User.query.filter(func.lower(User.name) == new_name.lower()).first():
            new_name = f"{base_name}_{str(uuid.uuid4())[:4]}"

        try:
            user = User(
                name=new_name,
                email=email,
                google_id=google_id,
                image=userinfo.get('picture'),
                status='active',
            )
            db.session.add(user)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Google ile yeni kullanıcı kaydı sırasında kritik hata: {e}")
            return error_response("register_error", "Hesabınız oluşturulurken bir hata oluştu", 500)

    login_user(user, remember=True)
    return jsonify({"message": "Google ile giriş başarılı", "user": profile_payload(user, include_private=True)})


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(e):
        return error_response("not_found", "İstenen kaynak bulunamadı", 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response("method_not_allowed", "Bu istek yöntemi desteklenmiyor", 405)

    @app.errorhandler(429)
    def ratelimit_handler(e):
        current_app.logger.warning(f"Hız sınırı aşıldı: {request.remote_addr} -> {request.path}")
        return error_response("rate_limited", "Çok fazla istek gönderdiniz, lütfen daha sonra tekrar deneyin", 429)

    @app.errorhandler(500)
    def internal_error(e):
        db.session.rollback()
        current_app.logger.error(f"Sunucu hatası ({request.path}): {e}")
        return error_response("server_error", "Sunucuda beklenmedik bir hata oluştu", 500)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return error_response(e.name.lower().replace(' ', '_'), e.description, e.code)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_host=1, x_proto=1)
    app.config.from_object(config_class)

    db.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    oauth.init_app(app)
    oauth.register(
        name='google',
        client_id=app.config['GOOGLE_CLIENT_ID'],
        client_secret=app.config['GOOGLE_CLIENT_SECRET'],
        server_metadata_url='https://accounts.google.com/.well-known/openid-configuration',
        client_kwargs={'scope': 'openid email profile'}
    )

    app.register_blueprint(auth_bp)
    app.register_blueprint(forum_bp, url_prefix='/api')
    app.register_blueprint(users_bp, url_prefix='/api')
    app.register_blueprint(notifications_bp, url_prefix='/api')

    register_error_handlers(app)

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Content-Security-Policy'] = "default-src 'self'; frame-ancestors 'self'"
        return response

    return app


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        db.create_all()

    app.run(host='0.0.0.0', port=5000, debug=False)
