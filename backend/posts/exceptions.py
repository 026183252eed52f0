from rest_framework import exceptions


class PostNotFound(exceptions.NotFound):
    default_detail = "Post not found."
    default_code = "post_not_found"


class CommentNotFound(exceptions.NotFound):
    # Also raised when the comment exists but belongs to another post.
    default_detail = "Comment not found."
    default_code = "comment_not_found"


class OwnershipRequired(exceptions.PermissionDenied):
    default_detail = "Permission denied. You must be the owner to modify this resource."
    default_code = "ownership_required"
