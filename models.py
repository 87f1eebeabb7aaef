import enum
from datetime import datetime, timezone

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from extensions import db


def utcnow():
    """Saat dilimi bilgisi olmayan UTC zamanı (SQLite ile uyumlu)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserRole(enum.Enum):
    user = 'user'
    admin = 'admin'

class NotificationType(enum.Enum):
    like = 'like'
    comment = 'comment'
    follow = 'follow'
    mention = 'mention'

THEMES = ('light', 'dark', 'system')

class User(UserMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    # Google ile kayıt olan kullanıcıların şifresi olmayabilir.
    password_hash = db.Column(db.String(256), nullable=True)
    google_id = db.Column(db.String(64), unique=True, nullable=True)
    image = db.Column(db.String(512), nullable=True)
    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.user)
    status = db.Column(db.String(20), nullable=False, default='active')  # 'active' veya 'deleted'
    created_at = db.Column(db.DateTime, default=utcnow)

    # --- Profil ---
    bio = db.Column(db.String(500), nullable=False, default='')
    location = db.Column(db.String(100), nullable=False, default='')
    website = db.Column(db.String(200), nullable=False, default='')

    # --- Oyunlaştırma ---
    xp = db.Column(db.Integer, nullable=False, default=0)
    level = db.Column(db.Integer, nullable=False, default=1)
    streak_current = db.Column(db.Integer, nullable=False, default=0)
    streak_longest = db.Column(db.Integer, nullable=False, default=0)
    # Hiç etkinlik yoksa boş kalır; ilk etkinlik seriyi 1'den başlatır.
    streak_last_active = db.Column(db.DateTime, nullable=True)

    # --- Birikimli istatistikler ---
    total_posts = db.Column(db.Integer, nullable=False, default=0)
    total_likes = db.Column(db.Integer, nullable=False, default=0)
    total_comments = db.Column(db.Integer, nullable=False, default=0)
    total_views = db.Column(db.Integer, nullable=False, default=0)

    # --- Tercihler ---
    theme = db.Column(db.String(10), nullable=False, default='system')
    notify_email = db.Column(db.Boolean, nullable=False, default=True)
    notify_push = db.Column(db.Boolean, nullable=False, default=True)

    badges = db.relationship('UserBadge', backref='user', lazy=True,
                             order_by='UserBadge.id', cascade="all, delete-orphan")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == UserRole.admin

    def __repr__(self):
        return f'<User {self.name} - {self.role.value if self.role else None}>'

class UserBadge(db.Model):
    """Kullanıcının kazandığı rozetler. Her rozet bir kez kazanılır."""
    __tablename__ = 'user_badge'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    badge_id = db.Column(db.String(50), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(255), nullable=False, default='')
    icon = db.Column(db.String(16), nullable=False, default='')
    earned_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    __table_args__ = (db.UniqueConstraint('user_id', 'badge_id', name='_user_badge_uc'),)

    def __repr__(self):
        return f'<UserBadge {self.badge_id} for User {self.user_id}>'

class Notification(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    recipient_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    sender_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    type = db.Column(db.Enum(NotificationType), nullable=False)
    message = db.Column(db.String(255), nullable=False)
    post_id = db.Column(db.Integer, db.ForeignKey('post.id', ondelete='SET NULL'), nullable=True)
    is_read = db.Column(db.Boolean, nullable=False, default=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    recipient = db.relationship('User', foreign_keys=[recipient_id],
                                backref=db.backref('notifications', lazy='dynamic', cascade="all, delete-orphan"))
    sender = db.relationship('User', foreign_keys=[sender_id])
    post = db.relationship('Post', backref=db.backref('notifications', lazy='dynamic', passive_deletes=True))

    def __repr__(self):
        return f'<Notification {self.type.value} to User {self.recipient_id}>'
