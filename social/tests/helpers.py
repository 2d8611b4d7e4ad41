from contextlib import contextmanager
from unittest.mock import patch

from django.db import IntegrityError

from social.models import Contract, Post, PublicProfile, Role, User


def make_user(uid="alice", *, role=Role.ARTIST, email_verified=True, private=False, **extra):
    """Create a user with its public profile; writer-ready by default."""
    email = extra.pop("email", f"{uid}@example.org")
    user = User.objects.create_user(
        username=uid,
        email=email,
        password=None,
        role=role,
        email_verified=email_verified,
        **extra,
    )
    PublicProfile.objects.create(user=user, handle=uid.lower()[:24], is_private_account=private)
    return user


def make_admin(uid="admin", **extra):
    return make_user(uid, role=Role.ADMIN, **extra)


def make_post(author, *, visibility=Post.VISIBILITY_PUBLIC, caption="hello", **extra):
    return Post.objects.create(author=author, caption=caption, visibility=visibility, **extra)


def make_contract(artist, creator, *, total=10000, paid=True, **extra):
    return Contract.objects.create(
        artist=artist,
        creator=creator,
        total_price_cents=total,
        payment_status=Contract.PAYMENT_PAID if paid else Contract.PAYMENT_UNPAID,
        **extra,
    )


def follower_count(user):
    return PublicProfile.objects.get(user=user).follower_count


@contextmanager
def lost_insert_race(model, competitor):
    """
    Make the next `model.objects.get_or_create` fail as if another transaction
    inserted the same unique row first, and commit that transaction's work
    (`competitor()`) before the retry runs.
    """
    original = model.objects.get_or_create
    conflicts = [IntegrityError(f"UNIQUE constraint failed: {model._meta.db_table}")]

    def get_or_create(*args, **kwargs):
        if conflicts:
            raise conflicts.pop()
        return original(*args, **kwargs)

    with patch.object(model.objects, "get_or_create", side_effect=get_or_create), \
         patch("social.transactions._backoff", side_effect=lambda attempt: competitor()) as backoff:
        yield backoff
