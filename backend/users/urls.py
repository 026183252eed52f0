from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView

from .views import register_user, user_profile

urlpatterns = [
    path("register/", register_user, name="register"),
    # POST email + password, returns {"refresh": ..., "access": ...}
    path("login/", TokenObtainPairView.as_view(), name="login"),
    path("me/", user_profile, name="me"),
]
