import os
from pathlib import Path # Path nesnesini kullanmak için

# Projenin temel dizin yolunu belirler.
basedir = Path(os.path.abspath(os.path.dirname(__file__)))

class Config:
    # --- KRİTİK GÜVENLİK AYARLARI ---
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'gelistirme-anahtari-degistir'
    GOOGLE_CLIENT_ID = os.environ.get('GOOGLE_CLIENT_ID')
    GOOGLE_CLIENT_SECRET = os.environ.get('GOOGLE_CLIENT_SECRET')

    # --- Veritabanı Ayarları ---
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + str(basedir / 'instance' / 'site.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- Flask Oturum (Session) Yapılandırması ---
    SESSION_PERMANENT = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # --- Hız Sınırı ---
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI') or 'memory://'

    # --- Loglama ---
    LOG_FILE = os.environ.get('LOG_FILE') or 'activity.log'

    # Her etkinlik için verilecek XP miktarı (nedene göre).
    XP_REWARDS = {
        'post': 20,
        'like': 5,
        'comment': 10,
    }
