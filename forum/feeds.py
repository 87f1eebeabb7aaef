# Dosya: forum/feeds.py
# Öne çıkan / trend akışları ve öne çıkan yazarlar.
# Puanlar her istekte yeniden hesaplanır, veritabanında saklanmaz.

from datetime import timedelta

from sqlalchemy import and_, case, func, select

from extensions import db
from models import User, utcnow
from utils import iso, make_excerpt, user_brief
from gamification.scoring import (
    AUTHOR_ACTIVE_DAYS, AUTHOR_LIMIT, FEATURED_LIMIT, FEATURED_WINDOW_DAYS,
    TREND_LIMIT, TREND_RECENT_BONUS, TREND_WINDOW_DAYS,
    author_rank, author_score, engagement_rate, featured_score, is_recent, trend_score,
)
from .models import CATEGORY_INFO, Comment, Like, Post

FEATURED_EXCERPT_LENGTH = 150
TRENDING_EXCERPT_LENGTH = 200


def post_counters():
    """Her gönderi için beğeni sayısı, görüntülenme ve yorum sayısı ifadeleri."""
    likes_count = (
        select(func.count(Like.id))
        .where(Like.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )
    comments_count = (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )
    views = func.coalesce(Post.views, 0)
    return likes_count, views, comments_count


def post_summary(post, author, likes_count, comments_count):
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "category": post.category.value,
        "slug": post.slug,
        "createdAt": iso(post.created_at),
        "updatedAt": iso(post.updated_at),
        "views": post.views or 0,
        "likesCount": int(likes_count or 0),
        "commentsCount": int(comments_count or 0),
        "author": user_brief(author),
    }


def _ranked_posts(score, window_days, limit, now):
    likes_count, _, comments_count = post_counters()
    score = score.label('score')
    return (
        db.session.query(
            Post, User,
            likes_count.label('likes_count'),
            comments_count.label('comments_count'),
            score,
        )
        .join(User, Post.user_id == User.id)
        .filter(Post.created_at >= now - timedelta(days=window_days))
        .order_by(score.desc(), Post.id.asc())
        .limit(limit)
        .all()
    )


def featured_posts(now=None, limit=FEATURED_LIMIT):
    now = now or utcnow()
    likes_count, views, comments_count = post_counters()
    engagement = featured_score(likes_count, views, comments_count)

    results = []
    for post, author, likes, comments, score in _ranked_posts(engagement, FEATURED_WINDOW_DAYS, limit, now):
        data = post_summary(post, author, likes, comments)
        data["engagement"] = int(score)
        data["excerpt"] = make_excerpt(post.content, FEATURED_EXCERPT_LENGTH)
        results.append(data)
    return results


def trending_posts(now=None, limit=TREND_LIMIT):
    now = now or utcnow()
    likes_count, views, comments_count = post_counters()
    recent_bonus = case((is_recent(Post.created_at, now), TREND_RECENT_BONUS), else_=0)
    score = trend_score(likes_count, views, comments_count, recent=False) + recent_bonus

    results = []
    for post, author, likes, comments, trend in _ranked_posts(score, TREND_WINDOW_DAYS, limit, now):
        data = post_summary(post, author, likes, comments)
        data["trendScore"] = int(trend)
        data["excerpt"] = make_excerpt(post.content, TRENDING_EXCERPT_LENGTH)
        results.append(data)
    return results


def featured_authors(now=None, limit=AUTHOR_LIMIT):
    """Yazarları tüm gönderilerinin toplam etkileşimine göre sıralar."""
    now = now or utcnow()
    likes_count, views, comments_count = post_counters()
    per_post = (
        db.session.query(
            Post.user_id.label('author_id'),
            views.label('views'),
            likes_count.label('likes'),
            comments_count.label('comments'),
            Post.created_at.label('created_at'),
        )
        .subquery()
    )

    total_posts = func.count(per_post.c.author_id)
    total_likes = func.sum(per_post.c.likes)
    total_views = func.sum(per_post.c.views)
    total_comments = func.sum(per_post.c.comments)
    latest_post = func.max(per_post.c.created_at)
    score = author_score(total_posts, total_likes, total_views, total_comments).label('score')

    rows = (
        db.session.query(
            User,
            total_posts.label('total_posts'),
            total_likes.label('total_likes'),
            total_views.label('total_views'),
            total_comments.label('total_comments'),
            latest_post.label('latest_post'),
            score,
        )
        .join(per_post, per_post.c.author_id == User.id)
        .group_by(User.id)
        .having(and_(
            total_posts >= 1,
            latest_post >= now - timedelta(days=AUTHOR_ACTIVE_DAYS),
        ))
        .order_by(score.desc(), User.id.asc())
        .limit(limit)
        .all()
    )

    authors = []
    for user, posts, likes, views_sum, comments, latest, author_total in rows:
        posts, likes, views_sum, comments = int(posts), int(likes or 0), int(views_sum or 0), int(comments or 0)
        authors.append({
            **user_brief(user),
            "level": user.level,
            "xp": user.xp,
            "badges": [badge.badge_id for badge in user.badges],
            "totalPosts": posts,
            "totalLikes": likes,
            "totalViews": views_sum,
            "totalComments": comments,
            "score": int(author_total),
            "latestPost": iso(latest),
            "bio": f"{posts} içerik, {likes} beğeni",
            "rank": author_rank(user.level),
            "engagementRate": engagement_rate(posts, likes, comments),
        })
    return authors


def category_stats():
    """Gönderisi olan kategorileri sayıları ve son gönderi tarihleriyle döndürür."""
    rows = (
        db.session.query(Post.category, func.count(Post.id), func.max(Post.created_at))
        .group_by(Post.category)
        .all()
    )
    stats = {category: (count, latest) for category, count, latest in rows}

    categories = []
    for category, info in CATEGORY_INFO.items():
        count, latest = stats.get(category, (0, None))
        if count <= 0:
            continue
        categories.append({
            "name": category.value,
            **info,
            "postCount": count,
            "latestPost": iso(latest),
        })
    return categories
