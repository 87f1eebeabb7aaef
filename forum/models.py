# Dosya: forum/models.py

import enum

from extensions import db  # Ana projemizdeki 'db' objesini buradan çekiyoruz
from models import User, utcnow    # 'User' modeline referans vermek için ana models.py'den import ediyoruz


class Category(enum.Enum):
    teknoloji = 'Teknoloji'
    bilim = 'Bilim'
    sanat = 'Sanat'
    spor = 'Spor'
    diğer = 'Diğer'

    @classmethod
    def from_value(cls, value):
        """Görünen addan kategoriyi bulur; geçersizse None döner."""
        for category in cls:
            if category.value == value:
                return category
        return None

# Kategori sayfasında gösterilen sabit bilgiler (sıra da burada belirlenir).
CATEGORY_INFO = {
    Category.teknoloji: {'color': 'from-blue-500 to-purple-500', 'icon': 'Flame',
                         'description': 'Yazılım, AI, yenilikler'},
    Category.bilim: {'color': 'from-green-500 to-blue-500', 'icon': 'Star',
                     'description': 'Araştırma, keşifler, bilimsel gelişmeler'},
    Category.sanat: {'color': 'from-pink-500 to-purple-500', 'icon': 'FileText',
                     'description': 'Yaratıcılık, kültür, estetik'},
    Category.spor: {'color': 'from-orange-500 to-red-500', 'icon': 'TrendingUp',
                    'description': 'Spor haberleri, analiz, sağlık'},
    Category.diğer: {'color': 'from-gray-500 to-gray-600', 'icon': 'Users',
                     'description': 'Genel konular ve çeşitli içerikler'},
}

class Post(db.Model):
    __tablename__ = 'post'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(220), unique=True, nullable=False)
    content = db.Column(db.Text, nullable=False)
    category = db.Column(db.Enum(Category), nullable=False, index=True)
    views = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, index=True, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)

    author = db.relationship('User', backref=db.backref('posts', lazy='dynamic'), foreign_keys=[user_id])
    comments = db.relationship('Comment', backref='post', lazy='dynamic', cascade="all, delete-orphan")
    likes = db.relationship('Like', backref='post', lazy='dynamic', cascade="all, delete-orphan")
    like_rewards = db.relationship('LikeReward', backref='post', lazy='dynamic', cascade="all, delete-orphan")

    def __repr__(self):
        return f'<Post {self.id} {self.slug}>'

class Comment(db.Model):
    """Gönderilere yapılan yorumları temsil eder."""
    __tablename__ = 'comment'

    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, index=True, default=utcnow)

    # Yorumun hangi posta ve hangi kullanıcıya ait olduğunu belirtir.
    post_id = db.Column(db.Integer, db.ForeignKey('post.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)

    # Yorum yazarını User tablosu ile ilişkilendirir.
    author = db.relationship('User', backref=db.backref('comments', lazy='dynamic'))

    def __repr__(self):
        return f'<Comment by User {self.user_id} on Post {self.post_id}>'

class Like(db.Model):
    """Gönderileri kimlerin beğendiğini temsil eder."""
    __tablename__ = 'like'

    id = db.Column(db.Integer, primary_key=True)

    # Beğeninin hangi posta ve hangi kullanıcıya ait olduğunu belirtir.
    post_id = db.Column(db.Integer, db.ForeignKey('post.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)

    # Beğeneni User tablosu ile ilişkilendirir.
    author = db.relationship('User', backref=db.backref('likes', lazy='dynamic'))

    # Bir kullanıcının aynı gönderiyi birden fazla kez beğenmesini engeller.
    __table_args__ = (db.UniqueConstraint('user_id', 'post_id', name='_user_post_like_uc'),)

    def __repr__(self):
        return f'<Like by User {self.user_id} on Post {self.post_id}>'

class LikeReward(db.Model):
    """Beğeni XP'si verilmiş (kullanıcı, gönderi) çiftleri. Yazar her okurdan bir kez ödül alır."""
    __tablename__ = 'like_reward'

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey('post.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    __table_args__ = (db.UniqueConstraint('user_id', 'post_id', name='_user_post_like_reward_uc'),)

    def __repr__(self):
        return f'<LikeReward User {self.user_id} on Post {self.post_id}>'
