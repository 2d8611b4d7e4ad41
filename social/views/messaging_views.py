from social.serializers import SendMessageSchema, TargetUserSchema
from social.services.identity import get_user_by_uid
from social.services.messaging import MessagingService
from social.services.notifications import NotificationService
from social.views.rpc import procedure


@procedure("openThread", TargetUserSchema)
def open_thread(request, data):
    thread = MessagingService(request.user).open_thread(get_user_by_uid(data["targetUid"]))
    return {"threadId": str(thread.pk)}


@procedure("createMessage", SendMessageSchema, rate_limited=True)
def create_message(request, data):
    message = MessagingService(request.user).create_message(data["threadId"], data["text"])
    return {"messageId": str(message.pk)}


@procedure("listNotifications", social=False)
def list_notifications(request, data):
    """Latest notifications for the caller, newest first."""
    service = NotificationService()
    items = [
        {
            "id": n.pk,
            "type": n.notification_type,
            "senderUid": n.sender.username if n.sender else None,
            "title": n.title,
            "body": n.body,
            "link": n.link,
            "isRead": n.is_read,
            "createdAt": n.created_at.isoformat(),
        }
        for n in service.fetch(request.user)[:50]
    ]
    return {"notifications": items, "unread": service.unread_count(request.user)}


@procedure("markNotificationsRead", social=False)
def mark_notifications_read(request, data):
    return {"updated": NotificationService().mark_all_read(request.user)}
