"""
Use cases behind the post and comment endpoints.

Every mutating call follows the same order: resolve the target (404),
check ownership (403), validate the input (400), then persist. Errors are
raised as DRF exceptions, so the views don't translate anything.
"""

import logging

from . import policies
from .exceptions import CommentNotFound, OwnershipRequired, PostNotFound
from .models import Post
from .repositories import CommentRepository, PostRepository
from .serializers import CommentWriteSerializer, PostWriteSerializer

logger = logging.getLogger(__name__)


def _validated(serializer_class, data, partial=False):
    serializer = serializer_class(data=data, partial=partial)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class PostService:
    def __init__(self, posts=None):
        self.posts = PostRepository() if posts is None else posts

    def get_post(self, post_id):
        post = self.posts.get(post_id)
        if post is None:
            raise PostNotFound()
        return post

    def list_posts(self, filters, user=None):
        """
        Posts matching ``filters`` (``search``, ``status``), newest first.

        Without an explicit status only published posts are listed, and that
        includes the caller's own drafts: ask for ``status=draft`` to see them.
        """
        search = filters.get("search") or None
        status = filters.get("status") or Post.Status.PUBLISHED

        logger.debug(
            "Listing posts status=%s search=%r for user %s",
            status,
            search,
            getattr(user, "id", None),
        )
        return self.posts.search(status=status, title_contains=search)

    def create_post(self, user, data):
        fields = _validated(PostWriteSerializer, data)
        post = self.posts.create(user, **fields)
        logger.info("User %s created post %s", user.id, post.id)
        return post

    def update_post(self, user, post_id, data):
        post = self.get_post(post_id)
        if not policies.can_update_post(user, post):
            logger.warning("User %s denied update of post %s", user.id, post.id)
            raise OwnershipRequired()

        fields = _validated(PostWriteSerializer, data, partial=True)
        post = self.posts.update(post, **fields)
        logger.info("User %s updated post %s (%s)", user.id, post.id, ", ".join(fields))
        return post

    def delete_post(self, user, post_id):
        post = self.get_post(post_id)
        if not policies.can_delete_post(user, post):
            logger.warning("User %s denied deletion of post %s", user.id, post.id)
            raise OwnershipRequired()

        self.posts.delete(post)
        logger.info("User %s deleted post %s", user.id, post_id)


class CommentService:
    def __init__(self, posts=None, comments=None):
        self.posts = PostRepository() if posts is None else posts
        self.comments = CommentRepository() if comments is None else comments

    def _get_post(self, post_id):
        post = self.posts.get(post_id)
        if post is None:
            raise PostNotFound()
        return post

    def _get_comment(self, post_id, comment_id):
        # Never look a comment up by its own id alone.
        comment = self.comments.get_for_post(post_id, comment_id)
        if comment is None:
            raise CommentNotFound()
        return comment

    def list_comments(self, post_id):
        self._get_post(post_id)
        return self.comments.for_post(post_id)

    def create_comment(self, user, post_id, data):
        post = self._get_post(post_id)
        fields = _validated(CommentWriteSerializer, data)
        comment = self.comments.create(user, post, **fields)
        logger.info("User %s commented %s on post %s", user.id, comment.id, post.id)
        return comment

    def update_comment(self, user, post_id, comment_id, data):
        comment = self._get_comment(post_id, comment_id)
        if not policies.can_update_comment(user, comment):
            logger.warning("User %s denied update of comment %s", user.id, comment.id)
            raise OwnershipRequired()

        fields = _validated(CommentWriteSerializer, data, partial=True)
        comment = self.comments.update(comment, **fields)
        logger.info("User %s updated comment %s", user.id, comment.id)
        return comment

    def delete_comment(self, user, post_id, comment_id):
        comment = self._get_comment(post_id, comment_id)
        if not policies.can_delete_comment(user, comment):
            logger.warning("User %s denied deletion of comment %s", user.id, comment.id)
            raise OwnershipRequired()

        self.comments.delete(comment)
        logger.info("User %s deleted comment %s", user.id, comment_id)
