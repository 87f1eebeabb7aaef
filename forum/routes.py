import math

import bleach
from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user

from extensions import db
from models import Notification, User
from utils import error_response, iso, send_notification, slugify, user_brief
from gamification.service import add_xp, record_view
from .feeds import (category_stats, featured_posts, post_counters, post_summary,
                    trending_posts)
from .models import Category, Comment, Like, LikeReward, Post

forum_bp = Blueprint('forum', __name__)

# --- AYARLAR VE SABİTLER ---
MAX_TITLE_LENGTH = 200
MAX_COMMENT_LENGTH = 1000
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def get_pagination():
    page = max(request.args.get('page', 1, type=int), 1)
    limit = min(max(request.args.get('limit', DEFAULT_PAGE_SIZE, type=int), 1), MAX_PAGE_SIZE)
    return page, limit

def comment_payload(comment):
    return {
        "id": comment.id,
        "content": comment.content,
        "createdAt": iso(comment.created_at),
        "author": user_brief(comment.author),
    }

def post_comments(post):
    comments = post.comments.order_by(Comment.created_at.desc(), Comment.id.desc()).all()
    return [comment_payload(c) for c in comments]

def post_detail(post):
    data = post_summary(post, post.author, post.likes.count(), post.comments.count())
    data["isLiked"] = (
        current_user.is_authenticated
        and Like.query.filter_by(user_id=current_user.id, post_id=post.id).first() is not None
    )
    data["comments"] = post_comments(post)
    return data


@forum_bp.route("/posts", methods=["GET"])
def list_posts():
    page, limit = get_pagination()
    likes_count, _, comments_count = post_counters()
    query = (
        db.session.query(Post, User, likes_count, comments_count)
        .join(User, Post.user_id == User.id)
    )

    category_name = request.args.get('category')
    if category_name:
        category = Category.from_value(category_name)
        if category is None:
            return error_response("invalid_category", "Geçersiz kategori seçimi", 400)
        query = query.filter(Post.category == category)

    try:
        total = query.count()
        rows = (
            query.order_by(Post.created_at.desc(), Post.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        posts = [post_summary(post, author, likes, comments) for post, author, likes, comments in rows]
        return jsonify({
            "posts": posts,
            "pagination": {"page": page, "limit": limit, "total": total,
                           "pages": math.ceil(total / limit)},
        })
    except Exception as e:
        current_app.logger.error(f"Gönderiler listelenirken hata: {e}")
        return error_response("post_fetch_error", "Gönderiler listelenirken bir hata oluştu", 500)

@forum_bp.route("/posts", methods=["POST"])
@login_required
def create_post():
    data = request.get_json(silent=True) or {}
    title = (data.get('title') or '').strip()
    content = (data.get('content') or '').strip()
    category_name = data.get('category')

    if not title or not content or not category_name:
        return error_response("post_fields_required", "Başlık, içerik ve kategori alanları zorunludur", 400)

    category = Category.from_value(category_name)
    if category is None:
        return error_response("invalid_category", "Geçersiz kategori seçimi", 400)

    if len(title) > MAX_TITLE_LENGTH:
        return error_response("title_too_long", f"Başlık en fazla {MAX_TITLE_LENGTH} karakter olabilir", 400)

    slug = slugify(title)
    if not slug:
        return error_response("invalid_title", "Başlık en az bir harf veya rakam içermelidir", 400)

    if Post.query.filter_by(slug=slug).first():
        return error_response("duplicate_slug", "Bu başlıkta bir gönderi zaten var", 400)

    try:
        post = Post(
            title=title,
            content=bleach.clean(content),
            category=category,
            slug=slug,
            user_id=current_user.id,
        )
        db.session.add(post)
        add_xp(current_user, current_app.config['XP_REWARDS']['post'], 'post')
        db.session.commit()
        current_app.logger.info(f"Kullanıcı {current_user.name} yeni gönderi oluşturdu: {post.slug}")
        return jsonify(post_detail(post)), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Gönderi oluşturma hatası: {e}")
        return error_response("post_create_error", "Gönderi oluşturulurken bir hata oluştu", 500)

@forum_bp.route("/posts/featured", methods=["GET"])
def get_featured_posts():
    try:
        return jsonify(featured_posts())
    except Exception as e:
        current_app.logger.error(f"Öne çıkan gönderiler listeleme hatası: {e}")
        return error_response("featured_fetch_error", "Öne çıkan gönderiler listelenirken bir hata oluştu", 500)

@forum_bp.route("/posts/trending", methods=["GET"])
def get_trending_posts():
    try:
        return jsonify(trending_posts())
    except Exception as e:
        current_app.logger.error(f"Trend gönderiler listeleme hatası: {e}")
        return error_response("trending_fetch_error", "Trend gönderiler listelenirken bir hata oluştu", 500)

@forum_bp.route("/categories", methods=["GET"])
def get_categories():
    try:
        return jsonify(category_stats())
    except Exception as e:
        current_app.logger.error(f"Kategori listeleme hatası: {e}")
        return error_response("category_fetch_error", "Kategoriler listelenirken bir hata oluştu", 500)

def view_post(post):
    """Gönderiyi görüntüler; yazarın kendisi dışındaki ziyaretler sayılır."""
    if not (current_user.is_authenticated and current_user.id == post.user_id):
        try:
            post.views = (post.views or 0) + 1
            record_view(post.author)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Görüntülenme sayacı güncellenemedi (Post {post.id}): {e}")
    return jsonify(post_detail(post))

@forum_bp.route("/posts/<int:post_id>", methods=["GET"])
def get_single_post(post_id):
    post = db.session.get(Post, post_id)
    if not post:
        return error_response("post_not_found", "Gönderi bulunamadı", 404)
    return view_post(post)

@forum_bp.route("/posts/slug/<slug>", methods=["GET"])
def get_post_by_slug(slug):
    post = Post.query.filter_by(slug=slug).first()
    if not post:
        return error_response("post_not_found", "Gönderi bulunamadı", 404)
    return view_post(post)

@forum_bp.route("/posts/<int:post_id>", methods=["DELETE"])
@login_required
def delete_post(post_id):
    post = db.session.get(Post, post_id)
    if not post:
        return error_response("post_not_found", "Gönderi bulunamadı", 404)

    # Sadece yazar veya admin silebilir
    if post.user_id != current_user.id and not current_user.is_admin:
        return error_response("delete_unauthorized", "Bu işlem için yetkiniz yok", 403)

    try:
        # Bildirimler kalır, sadece gönderi bağlantısı kopar.
        Notification.query.filter_by(post_id=post.id).update({"post_id": None})
        db.session.delete(post)
        db.session.commit()
        current_app.logger.info(f"Gönderi {post_id} kullanıcı {current_user.name} tarafından silindi.")
        return jsonify({"success": True, "message": "Gönderi başarıyla silindi"})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Gönderi silme hatası: {e}")
        return error_response("post_delete_error", "Bir hata oluştu", 500)

@forum_bp.route("/posts/<int:post_id>/like", methods=["POST"])
@login_required
def toggle_like_post(post_id):
    post = db.session.get(Post, post_id)
    if not post:
        return error_response("post_not_found", "Post bulunamadı", 404)

    is_own_post = post.user_id == current_user.id
    like = Like.query.filter_by(user_id=current_user.id, post_id=post.id).first()
    try:
        if like:
            # Unlike - beğeniyi kaldır
            db.session.delete(like)
            liked = False
        else:
            # Like - beğeni ekle
            db.session.add(Like(user_id=current_user.id, post_id=post.id))
            liked = True
            # Aynı okurun tekrar beğenmesi yazara yeniden XP kazandırmaz.
            rewarded = LikeReward.query.filter_by(user_id=current_user.id, post_id=post.id).first()
            if not is_own_post and not rewarded:
                db.session.add(LikeReward(user_id=current_user.id, post_id=post.id))
                add_xp(post.author, current_app.config['XP_REWARDS']['like'], 'like')
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Beğeni işlemi sırasında hata: {e}")
        return error_response("like_error", "Beğeni işlemi sırasında hata oluştu", 500)

    # Bildirim gönder (kendi postunu beğenmiyorsa)
    if liked and not is_own_post:
        send_notification(post.user_id, current_user.id, 'like', 'gönderinizi beğendi', post.id)

    return jsonify({
        "isLiked": liked,
        "likesCount": post.likes.count(),
        "message": "Beğenildi" if liked else "Beğeni kaldırıldı",
    })

@forum_bp.route("/posts/<int:post_id>/like", methods=["GET"])
def get_like_status(post_id):
    post = db.session.get(Post, post_id)
    if not post:
        return error_response("post_not_found", "Post bulunamadı", 404)
    is_liked = (
        current_user.is_authenticated
        and Like.query.filter_by(user_id=current_user.id, post_id=post.id).first() is not None
    )
    return jsonify({"isLiked": is_liked, "likesCount": post.likes.count()})

@forum_bp.route("/posts/<int:post_id>/comments", methods=["GET"])
def get_comments(post_id):
    post = db.session.get(Post, post_id)
    if not post:
        return error_response("post_not_found", "Post bulunamadı", 404)
    return jsonify({"comments": post_comments(post)})

@forum_bp.route("/posts/<int:post_id>/comments", methods=["POST"])
@login_required
def create_comment(post_id):
    data = request.get_json(silent=True) or {}
    content = data.get('content') or ''

    if not content.strip():
        return error_response("comment_content_missing", "Yorum içeriği gerekli", 400)

    if len(content) > MAX_COMMENT_LENGTH:
        return error_response("comment_too_long", f"Yorum en fazla {MAX_COMMENT_LENGTH} karakter olabilir", 400)

    post = db.session.get(Post, post_id)
    if not post:
        return error_response("post_not_found", "Post bulunamadı", 404)

    try:
        comment = Comment(
            content=bleach.clean(content.strip()),
            post_id=post.id,
            user_id=current_user.id,
        )
        db.session.add(comment)
        add_xp(current_user, current_app.config['XP_REWARDS']['comment'], 'comment')
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Yorum eklenirken hata oluştu: {e}")
        return error_response("comment_create_error", "Yorum eklenirken hata oluştu", 500)

    # Bildirim gönder (kendi postuna yorum yapmıyorsa)
    if post.user_id != current_user.id:
        send_notification(post.user_id, current_user.id, 'comment', 'gönderinize yorum yaptı', post.id)

    return jsonify({
        "comment": comment_payload(comment),
        "comments": post_comments(post),
    }), 201
