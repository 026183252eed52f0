"""
Service-level tests running against in-memory repositories (no database).
"""

import itertools
from types import SimpleNamespace

from django.test import SimpleTestCase
from rest_framework.exceptions import ValidationError

from .exceptions import CommentNotFound, OwnershipRequired, PostNotFound
from .services import CommentService, PostService

# --- In-memory repositories ---


class FakeStore:
    def __init__(self):
        self.posts = {}
        self.comments = {}
        self.ids = itertools.count(1)
        self.clock = itertools.count(1)


class FakePostRepository:
    def __init__(self, store):
        self.store = store

    def get(self, post_id):
        return self.store.posts.get(post_id)

    def search(self, status, title_contains=None):
        posts = [
            p
            for p in self.store.posts.values()
            if p.status == status and (not title_contains or title_contains in p.title)
        ]
        return sorted(posts, key=lambda p: (p.created_at, p.id), reverse=True)

    def create(self, user, **fields):
        post = SimpleNamespace(
            id=next(self.store.ids),
            user_id=user.id,
            created_at=next(self.store.clock),
            **fields,
        )
        self.store.posts[post.id] = post
        return post

    def update(self, post, **fields):
        for name, value in fields.items():
            setattr(post, name, value)
        return post

    def delete(self, post):
        del self.store.posts[post.id]
        for comment in list(self.store.comments.values()):
            if comment.post_id == post.id:
                del self.store.comments[comment.id]


class FakeCommentRepository:
    def __init__(self, store):
        self.store = store

    def for_post(self, post_id):
        return [c for c in self.store.comments.values() if c.post_id == post_id]

    def get_for_post(self, post_id, comment_id):
        comment = self.store.comments.get(comment_id)
        if comment is None or comment.post_id != post_id:
            return None
        return comment

    def create(self, user, post, **fields):
        comment = SimpleNamespace(
            id=next(self.store.ids),
            user_id=user.id,
            post_id=post.id,
            created_at=next(self.store.clock),
            **fields,
        )
        self.store.comments[comment.id] = comment
        return comment

    def update(self, comment, **fields):
        for name, value in fields.items():
            setattr(comment, name, value)
        return comment

    def delete(self, comment):
        del self.store.comments[comment.id]


def make_services():
    store = FakeStore()
    posts = FakePostRepository(store)
    comments = FakeCommentRepository(store)
    return store, PostService(posts), CommentService(posts, comments)


OWNER = SimpleNamespace(id=1, is_admin=False)
STRANGER = SimpleNamespace(id=2, is_admin=False)
ADMIN = SimpleNamespace(id=3, is_admin=True)


def post_data(**overrides):
    data = {"title": "Hello", "body": "World", "status": "published"}
    data.update(overrides)
    return data


# --- Posts ---


class ListPostsTests(SimpleTestCase):
    def setUp(self):
        self.store, self.posts, _ = make_services()

    def test_default_lists_published_only(self):
        published = self.posts.create_post(OWNER, post_data())
        self.posts.create_post(OWNER, post_data(status="draft"))

        self.assertEqual(list(self.posts.list_posts({})), [published])

    def test_default_applies_to_the_callers_own_drafts(self):
        self.posts.create_post(OWNER, post_data(status="draft"))
        self.assertEqual(list(self.posts.list_posts({}, OWNER)), [])

    def test_explicit_status(self):
        self.posts.create_post(OWNER, post_data())
        draft = self.posts.create_post(OWNER, post_data(status="draft"))

        self.assertEqual(list(self.posts.list_posts({"status": "draft"})), [draft])

    def test_empty_filters_fall_back_to_defaults(self):
        published = self.posts.create_post(OWNER, post_data())
        self.posts.create_post(OWNER, post_data(status="draft"))

        result = self.posts.list_posts({"status": "", "search": ""})
        self.assertEqual(list(result), [published])

    def test_search_and_order(self):
        first = self.posts.create_post(OWNER, post_data(title="Test one"))
        self.posts.create_post(OWNER, post_data(title="Another"))
        second = self.posts.create_post(STRANGER, post_data(title="Test two"))

        result = self.posts.list_posts({"search": "Test"})
        self.assertEqual(list(result), [second, first])


class PostMutationTests(SimpleTestCase):
    def setUp(self):
        self.store, self.posts, self.comments = make_services()
        self.post = self.posts.create_post(OWNER, post_data(status="draft"))

    def test_create_sets_owner(self):
        post = self.posts.create_post(STRANGER, post_data(title="Mine"))
        self.assertEqual(post.user_id, STRANGER.id)
        self.assertEqual(post.title, "Mine")

    def test_create_validates_required_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            self.posts.create_post(OWNER, {"title": "No body"})
        self.assertIn("body", ctx.exception.detail)
        self.assertIn("status", ctx.exception.detail)

    def test_create_validates_status(self):
        with self.assertRaises(ValidationError):
            self.posts.create_post(OWNER, post_data(status="archived"))

    def test_update_merges_supplied_fields(self):
        self.posts.update_post(OWNER, self.post.id, {"title": "Renamed"})

        self.assertEqual(self.post.title, "Renamed")
        self.assertEqual(self.post.body, "World")
        self.assertEqual(self.post.status, "draft")

    def test_update_drops_unknown_fields(self):
        self.posts.update_post(OWNER, self.post.id, {"user_id": STRANGER.id, "title": "x"})
        self.assertEqual(self.post.user_id, OWNER.id)

    def test_update_missing_post(self):
        with self.assertRaises(PostNotFound):
            self.posts.update_post(OWNER, 999, {"title": "x"})

    def test_update_by_non_owner_is_denied_before_validation(self):
        with self.assertRaises(OwnershipRequired):
            self.posts.update_post(STRANGER, self.post.id, {"status": "bogus"})
        self.assertEqual(self.post.status, "draft")

    def test_delete_by_owner_cascades(self):
        self.comments.create_comment(STRANGER, self.post.id, {"body": "hi"})

        self.posts.delete_post(OWNER, self.post.id)

        self.assertNotIn(self.post.id, self.store.posts)
        self.assertEqual(self.store.comments, {})

    def test_delete_by_non_owner_or_admin_is_denied(self):
        for user in (STRANGER, ADMIN):
            with self.assertRaises(OwnershipRequired):
                self.posts.delete_post(user, self.post.id)
        self.assertIn(self.post.id, self.store.posts)


# --- Comments ---


class CommentServiceTests(SimpleTestCase):
    def setUp(self):
        self.store, self.posts, self.comments = make_services()
        self.post = self.posts.create_post(OWNER, post_data())
        self.other_post = self.posts.create_post(OWNER, post_data())
        self.comment = self.comments.create_comment(OWNER, self.post.id, {"body": "First"})

    def test_create_attaches_owner_and_post(self):
        comment = self.comments.create_comment(STRANGER, self.post.id, {"body": "Hey"})
        self.assertEqual(comment.user_id, STRANGER.id)
        self.assertEqual(comment.post_id, self.post.id)

    def test_create_requires_body(self):
        with self.assertRaises(ValidationError):
            self.comments.create_comment(STRANGER, self.post.id, {"body": ""})

    def test_create_on_missing_post(self):
        with self.assertRaises(PostNotFound):
            self.comments.create_comment(STRANGER, 999, {"body": "Hey"})

    def test_list_is_scoped_to_post(self):
        self.comments.create_comment(STRANGER, self.other_post.id, {"body": "Elsewhere"})
        self.assertEqual(list(self.comments.list_comments(self.post.id)), [self.comment])

    def test_list_missing_post(self):
        with self.assertRaises(PostNotFound):
            self.comments.list_comments(999)

    def test_owner_updates_body_only(self):
        self.comments.update_comment(
            OWNER,
            self.post.id,
            self.comment.id,
            {"body": "Edited", "post_id": self.other_post.id},
        )
        self.assertEqual(self.comment.body, "Edited")
        self.assertEqual(self.comment.post_id, self.post.id)

    def test_non_owner_update_denied(self):
        for user in (STRANGER, ADMIN):
            with self.assertRaises(OwnershipRequired):
                self.comments.update_comment(user, self.post.id, self.comment.id, {"body": "x"})
        self.assertEqual(self.comment.body, "First")

    def test_lookup_through_wrong_post_is_not_found(self):
        with self.assertRaises(CommentNotFound):
            self.comments.update_comment(OWNER, self.other_post.id, self.comment.id, {"body": "x"})
        with self.assertRaises(CommentNotFound):
            self.comments.delete_comment(OWNER, self.other_post.id, self.comment.id)
        self.assertIn(self.comment.id, self.store.comments)

    def test_admin_deletes_any_comment(self):
        self.comments.delete_comment(ADMIN, self.post.id, self.comment.id)
        self.assertNotIn(self.comment.id, self.store.comments)

    def test_owner_delete_then_lookup_fails(self):
        self.comments.delete_comment(OWNER, self.post.id, self.comment.id)
        with self.assertRaises(CommentNotFound):
            self.comments.delete_comment(OWNER, self.post.id, self.comment.id)

    def test_stranger_delete_denied(self):
        with self.assertRaises(OwnershipRequired):
            self.comments.delete_comment(STRANGER, self.post.id, self.comment.id)
        self.assertIn(self.comment.id, self.store.comments)
