from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.tokens import RefreshToken

User = get_user_model()


class ProfileSerializer(serializers.ModelSerializer):
    """Read-only view of an account, used by /api/users/me/."""

    full_name = serializers.SerializerMethodField()
    is_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "email",
            "first_name",
            "last_name",
            "full_name",
            "is_admin",
            "created_at",
        )
        read_only_fields = fields

    def get_full_name(self, obj):
        return obj.get_full_name()


class RegisterSerializer(ProfileSerializer):
    # Never echoed back; hashed by UserManager.create_user()
    password = serializers.CharField(
        write_only=True,
        required=True,
        min_length=8,
        style={"input_type": "password"},
    )
    token = serializers.SerializerMethodField()

    class Meta(ProfileSerializer.Meta):
        fields = (
            "id",
            "email",
            "first_name",
            "last_name",
            "full_name",
            "is_admin",
            "created_at",
            "password",
            "token",
        )
        # Admin status cannot be self-assigned at registration.
        read_only_fields = ("id", "full_name", "is_admin", "created_at", "token")

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)

    def get_token(self, obj):
        return str(RefreshToken.for_user(obj).access_token)
