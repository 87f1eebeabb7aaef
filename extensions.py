from authlib.integrations.flask_client import OAuth
from flask import request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager, current_user
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect


def rate_limit_key():
    """
    Giriş yapmış kullanıcılar için kullanıcı ID'sini, anonim istekler için
    IP adresi ile tarayıcı bilgisinin birleşimini anahtar olarak kullanır.
    """
    if current_user.is_authenticated:
        return str(current_user.id)
    user_agent = request.headers.get('User-Agent', 'unknown-agent')
    return f"{get_remote_address()}-{user_agent}"


# Bu nesneleri burada oluşturuyoruz ama henüz bir uygulamaya bağlamıyoruz.
# Bu, farklı dosyalardan aynı nesnelere erişmemizi sağlar.
csrf = CSRFProtect()
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
oauth = OAuth()
limiter = Limiter(
    key_func=rate_limit_key,
    default_limits=["5000 per day", "300 per hour"],
)
