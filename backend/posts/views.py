from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from .pagination import PostPagination
from .serializers import CommentSerializer, PostSerializer
from .services import CommentService, PostService

# Lookups (404), ownership (403) and validation (400) all happen in the
# services and surface as DRF exceptions; the views only shape responses.

# --- Post Views ---


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticatedOrReadOnly])
def post_list_create(request):
    """
    GET: Paginated posts, filtered by ?search= and ?status= (default published).
    POST: Create a post owned by the caller (authenticated users only).
    """
    service = PostService()

    if request.method == "GET":
        posts = service.list_posts(request.query_params, request.user)
        paginator = PostPagination()
        page = paginator.paginate_queryset(posts, request)
        serializer = PostSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    post = service.create_post(request.user, request.data)
    return Response(PostSerializer(post).data, status=status.HTTP_201_CREATED)


@api_view(["PUT", "PATCH", "DELETE"])
@permission_classes([IsAuthenticatedOrReadOnly])
def post_detail(request, post_id):
    """
    PUT/PATCH: Update title/body/status (owner only). Both verbs only touch
    the fields supplied.
    DELETE: Delete the post and its comments (owner only).
    """
    service = PostService()

    if request.method == "DELETE":
        service.delete_post(request.user, post_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    post = service.update_post(request.user, post_id, request.data)
    return Response(PostSerializer(post).data)


# --- Comment Views ---


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticatedOrReadOnly])
def comment_list_create(request, post_id):
    """
    GET: Every comment of the post, oldest first, unpaginated.
    POST: Comment on the post as the caller (authenticated users only).
    """
    service = CommentService()

    if request.method == "GET":
        comments = service.list_comments(post_id)
        return Response(CommentSerializer(comments, many=True).data)

    comment = service.create_comment(request.user, post_id, request.data)
    return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)


@api_view(["PUT", "PATCH", "DELETE"])
@permission_classes([IsAuthenticatedOrReadOnly])
def comment_detail(request, post_id, comment_id):
    """
    PUT/PATCH: Edit the body (owner only).
    DELETE: Remove the comment (owner or admin).
    The comment must belong to post_id, otherwise it is a 404.
    """
    service = CommentService()

    if request.method == "DELETE":
        service.delete_comment(request.user, post_id, comment_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    comment = service.update_comment(request.user, post_id, comment_id, request.data)
    return Response(CommentSerializer(comment).data)
