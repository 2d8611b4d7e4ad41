"""Identity & role store: first-login provisioning, role transitions and admin actions."""

import logging
import secrets

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from social.errors import FailedPrecondition, InvalidArgument, NotFound, PermissionDenied
from social.firebase_admin_client import set_role_claim
from social.handles import suggest_handle_candidates
from social.models import CreatorProfile, PublicProfile, Role, User
from social.services.email import send_email
from social.services.gate import InteractionGate
from social.services.notifications import NotificationService
from social.transactions import run_in_transaction

logger = logging.getLogger(__name__)

SELF_ASSIGNABLE_ROLES = (Role.ARTIST, Role.CREATOR)
MAX_EVIDENCE_PATHS = 5


def admin_emails():
    return {email.strip().lower() for email in getattr(settings, "ADMIN_EMAIL_ALLOWLIST", []) if email.strip()}


def get_user_by_uid(uid):
    user = User.objects.filter(username=uid).first()
    if user is None:
        raise NotFound("USER_NOT_FOUND")
    return user


def require_admin(user):
    InteractionGate(user).require_active()
    if not user.is_admin:
        raise PermissionDenied("ADMIN_ONLY")
    return user


class IdentityService:
    def __init__(self, notifications=None):
        self.notifications = notifications or NotificationService()

    # First login

    def ensure_user(self, uid, email="", email_verified=False, display_name=""):
        """
        Return the user for `uid`, creating it (and its public profile) on first sight.

        New users start as `unassigned`, or `admin` when their email is on the
        allowlist. Later calls refresh the email fields from the token.
        """
        email = (email or "").strip().lower()
        user = User.objects.filter(username=uid).first()
        if user is None:
            user = self._provision(uid, email, email_verified, display_name)
            set_role_claim(uid, user.role)
            return user

        changed = []
        if email and user.email != email:
            user.email = email
            changed.append("email")
        if bool(email_verified) != user.email_verified:
            user.email_verified = bool(email_verified)
            changed.append("email_verified")
        if changed:
            user.save(update_fields=changed)
        return user

    def _provision(self, uid, email, email_verified, display_name):
        role = Role.ADMIN if email and email in admin_emails() else Role.UNASSIGNED
        try:
            with transaction.atomic():
                user = User.objects.create(
                    username=uid,
                    email=email,
                    email_verified=bool(email_verified),
                    role=role,
                    first_name=(display_name or "")[:150],
                )
                user.set_unusable_password()
                user.save(update_fields=["password"])
                PublicProfile.objects.create(
                    user=user,
                    handle=self._free_handle(uid, display_name or email),
                    display_name=(display_name or "")[:60],
                )
        except IntegrityError:
            # concurrent first login for the same uid won the insert
            user = User.objects.filter(username=uid).first()
            if user is None:
                raise
            return user
        logger.info("Provisioned user %s with role %s", uid, role)
        return user

    def _free_handle(self, uid, seed):
        candidates = suggest_handle_candidates(uid, seed)
        taken = set(PublicProfile.objects.filter(handle__in=candidates).values_list("handle", flat=True))
        for candidate in candidates:
            if candidate not in taken:
                return candidate
        while True:
            candidate = f"user_{secrets.token_hex(5)}"
            if not PublicProfile.objects.filter(handle=candidate).exists():
                return candidate

    # Roles

    def set_initial_role(self, user, role):
        """One-time `unassigned -> artist|creator` transition chosen by the user."""
        InteractionGate(user).require_active()
        if not user.email_verified:
            raise FailedPrecondition("EMAIL_NOT_VERIFIED")
        if role not in SELF_ASSIGNABLE_ROLES:
            raise InvalidArgument("INVALID_ROLE")
        role = run_in_transaction(self._set_initial_role, user, role)
        set_role_claim(user.username, role)
        return role

    def _set_initial_role(self, user, role):
        locked = User.objects.select_for_update().get(pk=user.pk)
        if locked.role != Role.UNASSIGNED:
            raise FailedPrecondition("ROLE_ALREADY_SET")
        locked.role = role
        locked.save(update_fields=["role"])
        if role == Role.CREATOR:
            CreatorProfile.objects.get_or_create(user=locked)
        user.role = role
        return role

    def admin_change_user_role(self, admin, uid, role):
        require_admin(admin)
        if role not in Role.values or role == Role.UNASSIGNED:
            raise InvalidArgument("INVALID_ROLE")
        target = get_user_by_uid(uid)
        run_in_transaction(self._change_role, target, role)
        set_role_claim(target.username, role)
        logger.info("Admin %s changed role of %s to %s", admin.username, uid, role)
        return target

    def _change_role(self, target, role):
        locked = User.objects.select_for_update().get(pk=target.pk)
        locked.role = role
        locked.save(update_fields=["role"])
        if role == Role.CREATOR:
            CreatorProfile.objects.get_or_create(user=locked)
        target.role = role

    def admin_set_user_status(self, admin, uid, status):
        require_admin(admin)
        if status not in (User.STATUS_ACTIVE, User.STATUS_SUSPENDED):
            raise InvalidArgument("INVALID_STATUS")
        target = get_user_by_uid(uid)
        if target.pk == admin.pk and status == User.STATUS_SUSPENDED:
            raise InvalidArgument("CANNOT_SUSPEND_SELF")
        User.objects.filter(pk=target.pk).update(status=status)
        target.status = status
        logger.info("Admin %s set status of %s to %s", admin.username, uid, status)
        return target

    # Creator verification

    def request_creator_verification(self, user, evidence_paths, notes=None):
        gate = InteractionGate(user)
        gate.require_writer()
        if user.role != Role.CREATOR:
            raise PermissionDenied("CREATOR_ONLY")
        paths = [p.strip() for p in evidence_paths or [] if p and p.strip()]
        if not paths:
            raise InvalidArgument("EVIDENCE_REQUIRED")
        if len(paths) > MAX_EVIDENCE_PATHS:
            raise InvalidArgument("TOO_MANY_EVIDENCE_PATHS")
        prefix = f"creatorEvidence/{user.username}/"
        if any(not p.startswith(prefix) or ".." in p for p in paths):
            raise InvalidArgument("EVIDENCE_PATH_INVALID")
        return run_in_transaction(self._request_verification, user, paths, notes)

    def _request_verification(self, user, paths, notes):
        profile, _ = CreatorProfile.objects.select_for_update().get_or_create(user=user)
        if profile.verification_status == CreatorProfile.VERIFICATION_VERIFIED:
            raise FailedPrecondition("ALREADY_VERIFIED")
        if profile.verification_status == CreatorProfile.VERIFICATION_PENDING:
            raise FailedPrecondition("VERIFICATION_PENDING")
        profile.verification_status = CreatorProfile.VERIFICATION_PENDING
        profile.evidence_paths = paths
        profile.verification_notes = notes or None
        profile.verification_requested_at = timezone.now()
        profile.save()
        self.notifications.notify_admins(
            "verification_requested",
            sender=user,
            title="Creator verification requested",
            body=f"{user.username} submitted {len(paths)} evidence file(s).",
            link=f"/admin/creators/{user.username}",
        )
        return profile

    def admin_set_creator_verification(self, admin, creator_uid, status, notes=None):
        require_admin(admin)
        if status not in (CreatorProfile.VERIFICATION_VERIFIED, CreatorProfile.VERIFICATION_REJECTED):
            raise InvalidArgument("INVALID_STATUS")
        creator = get_user_by_uid(creator_uid)
        if creator.role != Role.CREATOR:
            raise NotFound("CREATOR_NOT_FOUND")
        return run_in_transaction(self._set_verification, admin, creator, status, notes)

    def _set_verification(self, admin, creator, status, notes):
        profile, _ = CreatorProfile.objects.select_for_update().get_or_create(user=creator)
        profile.verification_status = status
        profile.verification_notes = notes or None
        profile.verification_reviewed_at = timezone.now()
        profile.verification_reviewed_by = admin
        profile.save()

        title = "You're verified" if status == CreatorProfile.VERIFICATION_VERIFIED else "Verification update"
        body = notes or f"Your creator verification was {status}."
        self.notifications.notify(creator, "verification_decision", sender=admin, title=title, body=body)
        send_email(creator.email, title, body)
        logger.info("Admin %s set verification of %s to %s", admin.username, creator.username, status)
        return profile
