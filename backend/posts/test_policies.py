from types import SimpleNamespace

from django.test import SimpleTestCase

from . import policies


def user(id, is_admin=False):
    return SimpleNamespace(id=id, is_admin=is_admin)


class PostPolicyTests(SimpleTestCase):
    def setUp(self):
        self.post = SimpleNamespace(id=10, user_id=1)

    def test_owner_can_update_and_delete(self):
        owner = user(1)
        self.assertTrue(policies.can_update_post(owner, self.post))
        self.assertTrue(policies.can_delete_post(owner, self.post))

    def test_non_owner_cannot_update_or_delete(self):
        stranger = user(2)
        self.assertFalse(policies.can_update_post(stranger, self.post))
        self.assertFalse(policies.can_delete_post(stranger, self.post))

    def test_admin_gets_no_post_override(self):
        admin = user(3, is_admin=True)
        self.assertFalse(policies.can_update_post(admin, self.post))
        self.assertFalse(policies.can_delete_post(admin, self.post))


class CommentPolicyTests(SimpleTestCase):
    def setUp(self):
        self.comment = SimpleNamespace(id=20, user_id=1, post_id=10)

    def test_only_owner_can_update(self):
        self.assertTrue(policies.can_update_comment(user(1), self.comment))
        self.assertFalse(policies.can_update_comment(user(2), self.comment))
        self.assertFalse(policies.can_update_comment(user(3, is_admin=True), self.comment))

    def test_owner_or_admin_can_delete(self):
        self.assertTrue(policies.can_delete_comment(user(1), self.comment))
        self.assertTrue(policies.can_delete_comment(user(3, is_admin=True), self.comment))
        self.assertFalse(policies.can_delete_comment(user(2), self.comment))

    def test_anonymous_owns_nothing(self):
        anonymous = SimpleNamespace(id=None, is_admin=False)
        orphan = SimpleNamespace(id=21, user_id=None, post_id=10)
        self.assertFalse(policies.can_update_comment(anonymous, orphan))
        self.assertFalse(policies.can_delete_comment(anonymous, orphan))
