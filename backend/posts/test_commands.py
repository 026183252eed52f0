from io import StringIO

from django.core.management import CommandError, call_command
from django.test import TestCase

from .factories import make_user
from .models import Post


class SeedPostsCommandTests(TestCase):
    def test_seeds_default_hundred_posts(self):
        out = StringIO()
        call_command("seed_posts", stdout=out)

        self.assertEqual(Post.objects.count(), 100)
        self.assertIn("Created 100 posts.", out.getvalue())
        self.assertTrue(
            set(Post.objects.values_list("status", flat=True)) <= set(Post.Status.values)
        )

    def test_seeds_for_given_owner(self):
        owner = make_user()
        call_command("seed_posts", "--count", "5", "--owner", str(owner.id), stdout=StringIO())

        self.assertEqual(Post.objects.filter(user=owner).count(), 5)
        self.assertEqual(Post.objects.count(), 5)

    def test_unknown_owner(self):
        with self.assertRaises(CommandError):
            call_command("seed_posts", "--owner", "9999", stdout=StringIO())
        self.assertEqual(Post.objects.count(), 0)

    def test_count_must_be_positive(self):
        with self.assertRaises(CommandError):
            call_command("seed_posts", "--count", "0", stdout=StringIO())
