"""
Faker-backed builders for users, posts and comments.

Used by the tests and by the ``seed_posts`` command. Every builder saves to
the database and accepts field overrides as keyword arguments.
"""

from django.contrib.auth import get_user_model
from faker import Faker

from .models import Comment, Post

fake = Faker()


def make_user(**overrides):
    fields = {
        "email": fake.unique.email(),
        "password": "password123",
        "first_name": fake.first_name()[:30],
        "last_name": fake.last_name()[:30],
    }
    fields.update(overrides)
    return get_user_model().objects.create_user(**fields)


def make_admin(**overrides):
    overrides.setdefault("is_staff", True)
    overrides.setdefault("is_superuser", True)
    return make_user(**overrides)


def make_post(user=None, **overrides):
    """A post owned by ``user`` (a fresh user when omitted), random status."""
    fields = {
        "title": fake.sentence()[:255],
        "body": "\n\n".join(fake.paragraphs(nb=3)),
        "status": fake.random_element(Post.Status.values),
    }
    fields.update(overrides)
    return Post.objects.create(user=user or make_user(), **fields)


def make_comment(post=None, user=None, **overrides):
    fields = {"body": fake.paragraph()}
    fields.update(overrides)
    return Comment.objects.create(
        post=post or make_post(),
        user=user or make_user(),
        **fields,
    )
