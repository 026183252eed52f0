"""
Ownership rules for mutating posts and comments.

Each rule takes the acting user and the target object and answers True/False.
They never raise; callers turn a False into a 403 (see services.py).
Only ``id``/``is_admin`` on the user and ``user_id`` on the target are read,
so any object carrying those attributes can be checked.
"""


def is_owner(user, obj):
    return user.id is not None and user.id == obj.user_id


def can_update_post(user, post):
    return is_owner(user, post)


def can_delete_post(user, post):
    return is_owner(user, post)


def can_update_comment(user, comment):
    return is_owner(user, comment)


def can_delete_comment(user, comment):
    # Admins moderate: they may remove anyone's comment, but not edit it.
    return bool(getattr(user, "is_admin", False)) or is_owner(user, comment)
