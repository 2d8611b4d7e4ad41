import logging
from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from google.api_core.exceptions import GoogleAPICallError, NotFound

from social.firebase_admin_client import (
    get_firestore_client,
    _is_running_tests,
    _env_truthy,
)
from social.models import PublicProfile

logger = logging.getLogger(__name__)
PUBLIC_PROFILES_COLLECTION = "publicProfiles"
_firestore_unavailable = False

def _should_log():
    """Decide whether to emit Firebase diagnostic logs."""
    return not _is_running_tests() or _env_truthy("FIREBASE_VERBOSE_TEST_LOGS")

def _profiles_collection():
    if _firestore_unavailable:
        return None
    db = get_firestore_client()
    if db is None:
        return None
    return db.collection(PUBLIC_PROFILES_COLLECTION)


@receiver(post_save, sender=PublicProfile)
def mirror_public_profile(sender, instance, created, **kwargs):
    """
    Copy the public profile to Firestore so clients can read it directly.

    The database row stays the source of truth; mirroring is best effort, runs
    only once the saving transaction commits and is skipped when Firestore is
    unavailable.
    """
    payload = _profile_payload(instance)
    transaction.on_commit(partial(_write_profile, instance.user.username, payload), robust=True)


@receiver(post_delete, sender=PublicProfile)
def remove_public_profile_mirror(sender, instance, **kwargs):
    transaction.on_commit(partial(_delete_profile, instance.user.username), robust=True)


def _write_profile(uid, payload):
    collection = _profiles_collection()
    if collection is None:
        return
    try:
        collection.document(uid).set(payload, merge=True)
    except NotFound:
        _mark_unavailable()
    except GoogleAPICallError as e:
        _log_sync_error(e)


def _delete_profile(uid):
    collection = _profiles_collection()
    if collection is None:
        return
    try:
        collection.document(uid).delete()
    except NotFound:
        _mark_unavailable()
    except GoogleAPICallError as e:
        _log_sync_error(e)

def _profile_payload(instance):
    return {
        "uid": instance.user.username,
        "handle": instance.handle,
        "displayName": instance.display_name,
        "bio": instance.bio,
        "isPrivateAccount": instance.is_private_account,
        "followerCount": instance.follower_count,
        "avatarAssetId": instance.avatar_asset_id,
        "updatedAt": instance.updated_at,
    }

def _mark_unavailable():
    global _firestore_unavailable
    _firestore_unavailable = True
    if _should_log():
        logger.warning(
            "Firestore database missing for project. Create it in GCP or set FIREBASE_ENABLE_FIRESTORE=false to disable syncing."
        )

def _log_sync_error(error):
    if _should_log():
        logger.warning("Error syncing public profile to Firestore: %s", error)
