from django.urls import path

from .views import comment_detail, comment_list_create, post_detail, post_list_create

urlpatterns = [
    # ----------------------------------------------------------------------
    # 1. POST Endpoints
    # ----------------------------------------------------------------------
    # Endpoint: /api/posts/
    # Methods: GET (List, public), POST (Create - authenticated)
    path("", post_list_create, name="post-list-create"),
    # Endpoint: /api/posts/<post_id>/
    # Methods: PUT/PATCH (Update - owner), DELETE (Delete - owner)
    path("<int:post_id>/", post_detail, name="post-detail"),
    # ----------------------------------------------------------------------
    # 2. COMMENT Endpoints (always scoped to their post)
    # ----------------------------------------------------------------------
    # Endpoint: /api/posts/<post_id>/comments/
    # Methods: GET (List, public), POST (Create - authenticated)
    path(
        "<int:post_id>/comments/",
        comment_list_create,
        name="comment-list-create",
    ),
    # Endpoint: /api/posts/<post_id>/comments/<comment_id>/
    # Methods: PUT/PATCH (Update - owner), DELETE (Delete - owner or admin)
    path(
        "<int:post_id>/comments/<int:comment_id>/",
        comment_detail,
        name="comment-detail",
    ),
]
