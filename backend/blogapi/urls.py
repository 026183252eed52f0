from django.urls import include, path

urlpatterns = [
    # /api/posts/ and the comments nested under each post
    path("api/posts/", include("posts.urls")),
    # /api/users/ registration, JWT login and the current user
    path("api/users/", include("users.urls")),
]
