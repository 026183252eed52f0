from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()

REGISTER_URL = reverse("register")
LOGIN_URL = reverse("login")
ME_URL = reverse("me")


class UserModelTests(TestCase):
    def test_create_user_hashes_password(self):
        user = User.objects.create_user(email="Reader@Example.com", password="password123")

        self.assertEqual(user.email, "Reader@example.com")
        self.assertTrue(user.check_password("password123"))
        self.assertFalse(user.is_admin)

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="", password="password123")

    def test_superuser_is_admin(self):
        admin = User.objects.create_superuser(email="admin@test.com", password="adminpassword")
        self.assertTrue(admin.is_admin)


class AccountAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.payload = {
            "email": "writer@test.com",
            "password": "password123",
            "first_name": "Wri",
            "last_name": "Ter",
        }

    def test_register(self):
        res = self.client.post(REGISTER_URL, self.payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["email"], "writer@test.com")
        self.assertEqual(res.data["full_name"], "Wri Ter")
        self.assertIn("token", res.data)
        self.assertNotIn("password", res.data)
        self.assertTrue(User.objects.get(email="writer@test.com").check_password("password123"))

    def test_register_cannot_self_promote(self):
        payload = dict(self.payload, is_staff=True, is_admin=True)
        res = self.client.post(REGISTER_URL, payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertFalse(User.objects.get(email="writer@test.com").is_admin)

    def test_register_duplicate_email(self):
        User.objects.create_user(email="writer@test.com", password="password123")
        res = self.client.post(REGISTER_URL, self.payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", res.data)

    def test_login_token_authenticates_writes(self):
        User.objects.create_user(email="writer@test.com", password="password123")

        res = self.client.post(
            LOGIN_URL, {"email": "writer@test.com", "password": "password123"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIn("refresh", res.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")
        res = self.client.post(
            reverse("post-list-create"),
            {"title": "Via JWT", "body": "Body", "status": "draft"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

    def test_login_wrong_password(self):
        User.objects.create_user(email="writer@test.com", password="password123")
        res = self.client.post(
            LOGIN_URL, {"email": "writer@test.com", "password": "nope"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me(self):
        user = User.objects.create_user(email="writer@test.com", password="password123")
        self.client.force_authenticate(user=user)

        res = self.client.get(ME_URL)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["id"], user.id)
        self.assertFalse(res.data["is_admin"])

    def test_me_anonymous(self):
        res = self.client.get(ME_URL)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
