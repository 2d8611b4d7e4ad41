from django.db.models.signals import post_save
from django.dispatch import receiver
from social.models import Comment, FollowEdge, Like, Message, Notification


@receiver(post_save, sender=FollowEdge)
def notify_on_follow(sender, instance, created, **kwargs):
    """Create a notification when a user starts following someone."""
    if created:
        Notification.objects.create(
            recipient=instance.followee,
            sender=instance.follower,
            notification_type="follow",
            title="New follower",
            link=f"/u/{instance.follower.username}",
        )


@receiver(post_save, sender=Like)
def notify_on_like(sender, instance, created, **kwargs):
    """Create a notification when a post is liked by someone else."""
    if created and instance.user_id != instance.post.author_id:
        Notification.objects.create(
            recipient=instance.post.author,
            sender=instance.user,
            notification_type="like",
            title="New like",
            link=f"/p/{instance.post_id}",
        )


@receiver(post_save, sender=Comment)
def notify_on_comment(sender, instance, created, **kwargs):
    """Notify the post author, and the parent comment's author for replies."""
    if not created:
        return
    recipients = [instance.post.author]
    if instance.parent_id is not None:
        recipients.append(instance.parent.author)
    notified = set()
    for recipient in recipients:
        if recipient.pk == instance.author_id or recipient.pk in notified:
            continue
        notified.add(recipient.pk)
        Notification.objects.create(
            recipient=recipient,
            sender=instance.author,
            notification_type="comment",
            title="New comment",
            body=instance.body[:140],
            link=f"/p/{instance.post_id}",
        )


@receiver(post_save, sender=Message)
def notify_on_message(sender, instance, created, **kwargs):
    """Notify the other participants of a thread about a new message."""
    if not created:
        return
    for participant in instance.thread.participants.exclude(pk=instance.sender_id):
        Notification.objects.create(
            recipient=participant,
            sender=instance.sender,
            notification_type="message",
            title="New message",
            body=instance.text[:140],
            link=f"/messages/{instance.thread_id}",
        )

