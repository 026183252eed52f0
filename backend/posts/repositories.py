"""
Data access for posts, comments and users.

The services only talk to these objects, never to ``Model.objects``, so the
same service code runs against the in-memory fakes used in test_services.py.
Lookups return ``None`` for a missing row; deciding what that means is the
caller's job.
"""

from django.contrib.auth import get_user_model
from django.db.models import Prefetch

from .models import Comment, Post


class UserRepository:
    def get(self, user_id):
        return get_user_model().objects.filter(pk=user_id).first()


class PostRepository:
    def get(self, post_id):
        return Post.objects.filter(pk=post_id).first()

    def search(self, status, title_contains=None):
        """
        Posts with the given status, newest first, owner and comments
        (with their owners) loaded up front for serialization.
        """
        queryset = Post.objects.filter(status=status)
        if title_contains:
            queryset = queryset.filter(title__contains=title_contains)

        # Optimization: one JOIN for the owner, one query for comments + owners
        return (
            queryset.select_related("user")
            .prefetch_related(
                Prefetch("comments", queryset=Comment.objects.select_related("user"))
            )
            .order_by("-created_at", "-id")
        )

    def create(self, user, **fields):
        return Post.objects.create(user=user, **fields)

    def update(self, post, **fields):
        for name, value in fields.items():
            setattr(post, name, value)
        post.save()
        return post

    def delete(self, post):
        # Comments are removed by the ON DELETE CASCADE of Comment.post
        post.delete()


class CommentRepository:
    def for_post(self, post_id):
        return Comment.objects.filter(post_id=post_id).select_related("user")

    def get_for_post(self, post_id, comment_id):
        """Scoped lookup: the comment must belong to ``post_id``."""
        return (
            Comment.objects.select_related("user")
            .filter(pk=comment_id, post_id=post_id)
            .first()
        )

    def create(self, user, post, **fields):
        return Comment.objects.create(user=user, post=post, **fields)

    def update(self, comment, **fields):
        for name, value in fields.items():
            setattr(comment, name, value)
        comment.save()
        return comment

    def delete(self, comment):
        comment.delete()
