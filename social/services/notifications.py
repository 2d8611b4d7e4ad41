"""Service helpers for writing and fetching in-app notifications."""

from social.models import Notification, Role, User


class NotificationService:
    """Encapsulate notification writes and querying."""

    def __init__(self, notification_model=Notification):
        self.notification_model = notification_model

    def notify(self, recipient, notification_type, *, sender=None, title="", body="", link="", follow_request=None):
        """Create one notification; callers run this inside the causing transaction."""
        return self.notification_model.objects.create(
            recipient=recipient,
            sender=sender,
            notification_type=notification_type,
            title=title[:120],
            body=body[:500],
            link=link,
            follow_request=follow_request,
        )

    def notify_admins(self, notification_type, *, sender=None, title="", body="", link=""):
        """Fan a notification out to every admin account; returns how many were written."""
        admins = User.objects.filter(role=Role.ADMIN, status=User.STATUS_ACTIVE)
        count = 0
        for admin in admins:
            if sender is not None and admin.pk == sender.pk:
                continue
            self.notify(admin, notification_type, sender=sender, title=title, body=body, link=link)
            count += 1
        return count

    def clear_follow_request_prompt(self, follow_request):
        """Remove the follow_request notification once the request is decided or withdrawn."""
        self.notification_model.objects.filter(
            follow_request=follow_request,
            notification_type="follow_request",
        ).delete()

    def fetch(self, user):
        """Fetch notifications for a user, hiding prompts for requests already decided."""
        return (
            self.notification_model.objects.filter(recipient=user)
            .exclude(notification_type="follow_request", follow_request__status__in=["approved", "rejected"])
            .select_related("sender", "follow_request")
            .order_by("-created_at", "-id")
        )

    def unread_count(self, user):
        return self.notification_model.objects.filter(recipient=user, is_read=False).count()

    def mark_all_read(self, user):
        """Mark all unread notifications for the user as read."""
        return self.notification_model.objects.filter(recipient=user, is_read=False).update(is_read=True)
