from django.test import TestCase
from django.urls import reverse

# We use the APIClient for making requests to DRF views
from rest_framework import status
from rest_framework.test import APIClient

from .factories import make_admin, make_comment, make_post, make_user
from .models import Comment, Post

# --- URL Helpers ---
POST_LIST_CREATE_URL = reverse("post-list-create")


def post_detail_url(post_id):
    return reverse("post-detail", kwargs={"post_id": post_id})


def comment_list_url(post_id):
    return reverse("comment-list-create", kwargs={"post_id": post_id})


def comment_detail_url(post_id, comment_id):
    return reverse(
        "comment-detail", kwargs={"post_id": post_id, "comment_id": comment_id}
    )


POST_KEYS = {
    "id",
    "title",
    "body",
    "status",
    "user_id",
    "user",
    "comments",
    "created_at",
    "updated_at",
}
COMMENT_KEYS = {"id", "body", "user_id", "post_id", "user", "created_at", "updated_at"}


# ----------------------------------------------------------------------
# A. Post listing (search, status filter, pagination)
# ----------------------------------------------------------------------


class PostListAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user()
        self.client.force_authenticate(user=self.user)

    def test_list_is_paginated_by_ten(self):
        for _ in range(15):
            make_post(status=Post.Status.PUBLISHED)

        res = self.client.get(POST_LIST_CREATE_URL)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["data"]), 10)
        self.assertEqual(set(res.data["data"][0]), POST_KEYS)
        self.assertEqual(res.data["meta"]["total"], 15)
        self.assertEqual(res.data["meta"]["per_page"], 10)
        self.assertEqual(res.data["meta"]["last_page"], 2)
        self.assertIsNotNone(res.data["links"]["next"])
        self.assertIsNone(res.data["links"]["prev"])

    def test_second_page_holds_the_rest(self):
        for _ in range(15):
            make_post(status=Post.Status.PUBLISHED)

        res = self.client.get(POST_LIST_CREATE_URL, {"page": 2})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["data"]), 5)
        self.assertEqual(res.data["meta"]["current_page"], 2)
        self.assertIsNone(res.data["links"]["next"])

    def test_page_past_the_end_is_404(self):
        make_post(status=Post.Status.PUBLISHED)
        res = self.client.get(POST_LIST_CREATE_URL, {"page": 5})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_filter_by_status(self):
        make_post(status=Post.Status.PUBLISHED)
        make_post(status=Post.Status.DRAFT)

        res = self.client.get(POST_LIST_CREATE_URL, {"status": "published"})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["data"]), 1)
        self.assertEqual(res.data["data"][0]["status"], "published")

    def test_drafts_listed_only_when_asked_for(self):
        draft = make_post(status=Post.Status.DRAFT)
        make_post(status=Post.Status.PUBLISHED)

        res = self.client.get(POST_LIST_CREATE_URL, {"status": "draft"})

        self.assertEqual([p["id"] for p in res.data["data"]], [draft.id])

    def test_default_listing_hides_own_drafts(self):
        make_post(self.user, status=Post.Status.DRAFT)

        res = self.client.get(POST_LIST_CREATE_URL)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"], [])
        self.assertEqual(res.data["meta"]["total"], 0)

    def test_search_matches_title_substring(self):
        make_post(title="Test Post", status=Post.Status.PUBLISHED)
        make_post(title="Another Post", status=Post.Status.PUBLISHED)

        res = self.client.get(POST_LIST_CREATE_URL, {"search": "Test"})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([p["title"] for p in res.data["data"]], ["Test Post"])

    def test_search_and_status_combine(self):
        make_post(title="Test Post", status=Post.Status.DRAFT)
        make_post(title="Test Post Two", status=Post.Status.PUBLISHED)

        res = self.client.get(POST_LIST_CREATE_URL, {"search": "Test", "status": "draft"})

        self.assertEqual([p["title"] for p in res.data["data"]], ["Test Post"])

    def test_newest_first(self):
        older = make_post(status=Post.Status.PUBLISHED)
        newer = make_post(status=Post.Status.PUBLISHED)

        res = self.client.get(POST_LIST_CREATE_URL)

        self.assertEqual([p["id"] for p in res.data["data"]], [newer.id, older.id])

    def test_posts_embed_owner_and_comments(self):
        post = make_post(self.user, status=Post.Status.PUBLISHED)
        commenter = make_user()
        make_comment(post, commenter, body="Nice one")

        res = self.client.get(POST_LIST_CREATE_URL)
        item = res.data["data"][0]

        self.assertEqual(item["user"]["id"], self.user.id)
        self.assertEqual(item["user"]["email"], self.user.email)
        self.assertEqual(len(item["comments"]), 1)
        self.assertEqual(item["comments"][0]["body"], "Nice one")
        self.assertEqual(item["comments"][0]["user"]["id"], commenter.id)

    def test_anonymous_can_list(self):
        make_post(status=Post.Status.PUBLISHED)
        res = APIClient().get(POST_LIST_CREATE_URL)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["data"]), 1)


# ----------------------------------------------------------------------
# B. Post create / update / delete
# ----------------------------------------------------------------------


class PostWriteAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user()
        self.other_user = make_user()
        self.client.force_authenticate(user=self.user)
        self.post = make_post(
            self.user, title="Original", body="Original body", status=Post.Status.DRAFT
        )
        self.payload = {
            "title": "New Post",
            "body": "This is the body of the new post",
            "status": "published",
        }

    # --- CREATE ---

    def test_create_post(self):
        res = self.client.post(POST_LIST_CREATE_URL, self.payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["title"], "New Post")
        self.assertEqual(res.data["status"], "published")
        self.assertEqual(res.data["user_id"], self.user.id)
        self.assertTrue(
            Post.objects.filter(
                title="New Post", status="published", user=self.user
            ).exists()
        )

    def test_create_post_requires_title_and_body(self):
        res = self.client.post(POST_LIST_CREATE_URL, {"status": "draft"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("title", res.data)
        self.assertIn("body", res.data)

    def test_create_post_rejects_unknown_status(self):
        payload = dict(self.payload, status="archived")
        res = self.client.post(POST_LIST_CREATE_URL, payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("status", res.data)
        self.assertFalse(Post.objects.filter(title="New Post").exists())

    def test_create_post_cannot_pick_owner(self):
        payload = dict(self.payload, user_id=self.other_user.id)
        res = self.client.post(POST_LIST_CREATE_URL, payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["user_id"], self.user.id)

    def test_create_post_anonymous_unauthorized(self):
        res = APIClient().post(POST_LIST_CREATE_URL, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    # --- UPDATE ---

    def test_update_own_post(self):
        res = self.client.put(
            post_detail_url(self.post.id),
            {"title": "Updated Title", "body": "Updated body content", "status": "published"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["id"], self.post.id)
        self.assertEqual(res.data["title"], "Updated Title")
        self.post.refresh_from_db()
        self.assertEqual(self.post.body, "Updated body content")
        self.assertEqual(self.post.status, Post.Status.PUBLISHED)

    def test_update_only_touches_supplied_fields(self):
        res = self.client.patch(
            post_detail_url(self.post.id), {"title": "Just the title"}, format="json"
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.post.refresh_from_db()
        self.assertEqual(self.post.title, "Just the title")
        self.assertEqual(self.post.body, "Original body")
        self.assertEqual(self.post.status, Post.Status.DRAFT)

    def test_update_ignores_owner_change(self):
        res = self.client.put(
            post_detail_url(self.post.id),
            {"title": "Mine", "user_id": self.other_user.id},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.post.refresh_from_db()
        self.assertEqual(self.post.user_id, self.user.id)

    def test_update_rejects_unknown_status(self):
        res = self.client.patch(
            post_detail_url(self.post.id), {"status": "archived"}, format="json"
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.post.refresh_from_db()
        self.assertEqual(self.post.status, Post.Status.DRAFT)

    def test_cannot_update_post_of_another_user(self):
        self.client.force_authenticate(user=self.other_user)
        res = self.client.put(
            post_detail_url(self.post.id), {"title": "Trying to update"}, format="json"
        )

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.post.refresh_from_db()
        self.assertEqual(self.post.title, "Original")

    def test_update_missing_post_404(self):
        res = self.client.put(post_detail_url(self.post.id + 100), {"title": "x"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    # --- DELETE ---

    def test_delete_own_post_removes_its_comments(self):
        make_comment(self.post, self.other_user)
        make_comment(self.post, self.user)

        res = self.client.delete(post_detail_url(self.post.id))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Post.objects.filter(pk=self.post.id).exists())
        self.assertFalse(Comment.objects.filter(post_id=self.post.id).exists())

    def test_cannot_delete_post_of_another_user(self):
        self.client.force_authenticate(user=self.other_user)
        res = self.client.delete(post_detail_url(self.post.id))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Post.objects.filter(pk=self.post.id).exists())

    def test_admin_cannot_delete_post_of_another_user(self):
        self.client.force_authenticate(user=make_admin())
        res = self.client.delete(post_detail_url(self.post.id))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_anonymous_unauthorized(self):
        res = APIClient().delete(post_detail_url(self.post.id))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)


# ----------------------------------------------------------------------
# C. Comments (always addressed through their post)
# ----------------------------------------------------------------------


class CommentAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.author = make_user()
        self.other_user = make_user()
        self.admin = make_admin()
        self.post = make_post(status=Post.Status.PUBLISHED)
        self.comment = make_comment(self.post, self.author, body="First comment")

    # --- LIST ---

    def test_list_comments_for_post(self):
        make_comment(self.post)
        make_comment(self.post)
        make_comment()  # on another post

        res = self.client.get(comment_list_url(self.post.id))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 3)
        self.assertEqual(set(res.data[0]), COMMENT_KEYS)
        self.assertEqual(res.data[0]["id"], self.comment.id)
        self.assertTrue(all(c["post_id"] == self.post.id for c in res.data))

    def test_list_comments_missing_post_404(self):
        res = self.client.get(comment_list_url(self.post.id + 100))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    # --- CREATE ---

    def test_create_comment(self):
        self.client.force_authenticate(user=self.other_user)
        res = self.client.post(
            comment_list_url(self.post.id),
            {"body": "This is a test comment"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["body"], "This is a test comment")
        self.assertEqual(res.data["user_id"], self.other_user.id)
        self.assertEqual(res.data["post_id"], self.post.id)
        self.assertTrue(
            Comment.objects.filter(
                body="This is a test comment", user=self.other_user, post=self.post
            ).exists()
        )

    def test_create_comment_requires_body(self):
        self.client.force_authenticate(user=self.other_user)
        res = self.client.post(comment_list_url(self.post.id), {}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("body", res.data)

    def test_create_comment_on_missing_post_404(self):
        self.client.force_authenticate(user=self.other_user)
        res = self.client.post(
            comment_list_url(self.post.id + 100), {"body": "Hello"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_create_comment_anonymous_unauthorized(self):
        res = self.client.post(comment_list_url(self.post.id), {"body": "Hi"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    # --- UPDATE ---

    def test_update_own_comment(self):
        self.client.force_authenticate(user=self.author)
        res = self.client.put(
            comment_detail_url(self.post.id, self.comment.id),
            {"body": "This is an updated comment"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["id"], self.comment.id)
        self.assertEqual(res.data["body"], "This is an updated comment")
        self.assertEqual(res.data["user_id"], self.author.id)
        self.comment.refresh_from_db()
        self.assertEqual(self.comment.body, "This is an updated comment")

    def test_update_comment_cannot_move_it(self):
        other_post = make_post()
        self.client.force_authenticate(user=self.author)
        self.client.put(
            comment_detail_url(self.post.id, self.comment.id),
            {"body": "Moved?", "post_id": other_post.id, "user_id": self.other_user.id},
            format="json",
        )

        self.comment.refresh_from_db()
        self.assertEqual(self.comment.post_id, self.post.id)
        self.assertEqual(self.comment.user_id, self.author.id)

    def test_cannot_update_comment_of_another_user(self):
        self.client.force_authenticate(user=self.other_user)
        res = self.client.put(
            comment_detail_url(self.post.id, self.comment.id),
            {"body": "Attempted update"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.comment.refresh_from_db()
        self.assertEqual(self.comment.body, "First comment")

    def test_admin_cannot_update_comment_of_another_user(self):
        self.client.force_authenticate(user=self.admin)
        res = self.client.patch(
            comment_detail_url(self.post.id, self.comment.id),
            {"body": "Edited by admin"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    # --- DELETE ---

    def test_delete_own_comment(self):
        self.client.force_authenticate(user=self.author)
        url = comment_detail_url(self.post.id, self.comment.id)

        res = self.client.delete(url)
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Comment.objects.filter(pk=self.comment.id).exists())

        # Gone for good: the scoped lookup no longer resolves
        res = self.client.put(url, {"body": "Still there?"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_can_delete_any_comment(self):
        self.client.force_authenticate(user=self.admin)
        res = self.client.delete(comment_detail_url(self.post.id, self.comment.id))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Comment.objects.filter(pk=self.comment.id).exists())

    def test_cannot_delete_comment_of_another_user(self):
        self.client.force_authenticate(user=self.other_user)
        res = self.client.delete(comment_detail_url(self.post.id, self.comment.id))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Comment.objects.filter(pk=self.comment.id).exists())

    # --- SCOPED LOOKUP ---

    def test_comment_addressed_through_wrong_post_is_404(self):
        other_post = make_post(self.author)
        url = comment_detail_url(other_post.id, self.comment.id)
        self.client.force_authenticate(user=self.author)

        res = self.client.put(url, {"body": "Wrong post"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

        res = self.client.delete(url)
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

        self.comment.refresh_from_db()
        self.assertEqual(self.comment.body, "First comment")
