from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Comment, Post

User = get_user_model()

# --- Read Serializers ---


class AuthorSerializer(serializers.ModelSerializer):
    """Minimal serializer for displaying the Post/Comment owner."""

    full_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ("id", "email", "full_name")
        read_only_fields = fields

    def get_full_name(self, obj):
        return obj.get_full_name()


class CommentSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    post_id = serializers.IntegerField(read_only=True)
    user = AuthorSerializer(read_only=True)

    class Meta:
        model = Comment
        fields = ("id", "body", "user_id", "post_id", "user", "created_at", "updated_at")
        read_only_fields = fields


class PostSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    user = AuthorSerializer(read_only=True)
    # Served from the prefetch done in PostRepository.search()
    comments = CommentSerializer(many=True, read_only=True)

    class Meta:
        model = Post
        fields = (
            "id",
            "title",
            "body",
            "status",
            "user_id",
            "user",
            "comments",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


# --- Write Serializers ---
# Plain serializers: they only validate input, persistence goes through the
# repositories. Anything not declared here (user_id, post_id, ...) is dropped.


class PostWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    body = serializers.CharField()
    status = serializers.ChoiceField(choices=Post.Status.choices)


class CommentWriteSerializer(serializers.Serializer):
    body = serializers.CharField()
