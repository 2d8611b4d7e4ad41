import uuid

from django.test import TestCase

from social.errors import InvalidArgument, NotFound, PermissionDenied
from social.models import Comment, Notification, Post
from social.services import CommentService, RelationshipGraph
from social.services.comments import remove_comment
from social.tests.helpers import make_admin, make_post, make_user


class CommentServiceTestCase(TestCase):
    def setUp(self):
        self.author = make_user("author")
        self.commenter = make_user("commenter")
        self.post = make_post(self.author)

    def comment_count(self):
        return Post.objects.get(pk=self.post.pk).comment_count

    def test_create_comment_increments_count(self):
        comment = CommentService(self.commenter).create_comment(self.post.pk, "  nice  ")
        self.assertEqual(comment.body, "nice")
        self.assertEqual(self.comment_count(), 1)
        self.assertTrue(
            Notification.objects.filter(recipient=self.author, notification_type="comment").exists()
        )

    def test_empty_comment(self):
        with self.assertRaises(InvalidArgument):
            CommentService(self.commenter).create_comment(self.post.pk, "   ")
        self.assertEqual(self.comment_count(), 0)

    def test_reply_notifies_parent_author_once(self):
        parent = CommentService(self.commenter).create_comment(self.post.pk, "first")
        Notification.objects.all().delete()
        CommentService(self.author).create_comment(self.post.pk, "reply", parent.pk)
        self.assertEqual(list(Notification.objects.values_list("recipient__username", flat=True)), ["commenter"])
        self.assertEqual(self.comment_count(), 2)

    def test_reply_to_reply_is_invalid(self):
        parent = CommentService(self.commenter).create_comment(self.post.pk, "first")
        reply = CommentService(self.author).create_comment(self.post.pk, "second", parent.pk)
        with self.assertRaises(InvalidArgument) as ctx:
            CommentService(self.commenter).create_comment(self.post.pk, "third", reply.pk)
        self.assertEqual(ctx.exception.message, "INVALID_PARENT")
        self.assertEqual(self.comment_count(), 2)

    def test_parent_from_other_post(self):
        other = make_post(self.author)
        parent = CommentService(self.commenter).create_comment(other.pk, "elsewhere")
        with self.assertRaises(InvalidArgument):
            CommentService(self.commenter).create_comment(self.post.pk, "x", parent.pk)

    def test_missing_parent(self):
        with self.assertRaises(NotFound):
            CommentService(self.commenter).create_comment(self.post.pk, "x", uuid.uuid4())

    def test_blocked_commenter(self):
        RelationshipGraph().block(self.author, self.commenter)
        with self.assertRaises(PermissionDenied) as ctx:
            CommentService(self.commenter).create_comment(self.post.pk, "hi")
        self.assertEqual(ctx.exception.message, "BLOCKED")
        self.assertFalse(Comment.objects.exists())

    def test_delete_by_post_author_removes_replies(self):
        parent = CommentService(self.commenter).create_comment(self.post.pk, "first")
        CommentService(self.author).create_comment(self.post.pk, "reply", parent.pk)
        removed = CommentService(self.author).delete_comment(self.post.pk, parent.pk)
        self.assertEqual(removed, 2)
        self.assertEqual(self.comment_count(), 0)
        self.assertFalse(Comment.objects.exists())

    def test_delete_by_stranger(self):
        comment = CommentService(self.commenter).create_comment(self.post.pk, "first")
        with self.assertRaises(PermissionDenied):
            CommentService(make_user("stranger")).delete_comment(self.post.pk, comment.pk)
        self.assertEqual(CommentService(make_admin()).delete_comment(self.post.pk, comment.pk), 1)

    def test_delete_missing_comment(self):
        with self.assertRaises(NotFound):
            CommentService(self.author).delete_comment(self.post.pk, uuid.uuid4())

    def test_remove_comment_clamps(self):
        comment = Comment.objects.create(post=self.post, author=self.commenter, body="raw")
        with self.assertLogs("social.services.counters", level="WARNING"):
            self.assertEqual(remove_comment(comment), 1)
        self.assertEqual(self.comment_count(), 0)
