import sys

# Gerekli Flask uygulama bileşenlerini içe aktar
from app import create_app
from extensions import db
from models import User, UserRole

YENI_ROL = UserRole.admin


def set_user_role(email, new_role=YENI_ROL):
    """
    Belirtilen e-postaya sahip kullanıcının rolünü günceller.
    Başarılıysa True döner.
    """
    user = User.query.filter_by(email=email.strip().lower()).first()

    if not user:
        print(f"\nHATA: '{email}' e-posta adresine sahip bir kullanıcı bulunamadı.")
        return False

    print(f"Kullanıcı bulundu: {user.name} (Mevcut Rol: {user.role.value})")

    if user.role == new_role:
        print(f"Kullanıcı zaten '{new_role.value}' rolüne sahip. Değişiklik yapılmadı.")
        return True

    user.role = new_role
    try:
        # Değişikliği veritabanına kaydet
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        print(f"\nHATA: Veritabanına kayıt sırasında bir sorun oluştu: {e}")
        return False

    print(f"\n*** BAŞARILI ***")
    print(f"Kullanıcı: {user.name}")
    print(f"Yeni Rol: {user.role.value}")
    return True


# Bu betik doğrudan çalıştırıldığında 'set_user_role' fonksiyonunu çağır
if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Kullanım: python make_admin.py <e-posta>")
        sys.exit(2)

    # Veritabanı işlemi yapabilmek için Flask uygulama bağlamına (app context) ihtiyacımız var.
    app = create_app()
    with app.app_context():
        ok = set_user_role(sys.argv[1])
    sys.exit(0 if ok else 1)
