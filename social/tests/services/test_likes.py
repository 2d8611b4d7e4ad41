from django.test import TestCase

from social.errors import FailedPrecondition, PermissionDenied
from social.models import Like, Notification, Post
from social.services import LikeService, RelationshipGraph
from social.tests.helpers import lost_insert_race, make_post, make_user


class ToggleLikeTestCase(TestCase):
    def setUp(self):
        self.author = make_user("author")
        self.fan = make_user("fan")
        self.post = make_post(self.author)

    def like_count(self):
        return Post.objects.get(pk=self.post.pk).like_count

    def test_like_is_idempotent(self):
        service = LikeService(self.fan)
        self.assertEqual(service.toggle_like(self.post.pk, True), 1)
        self.assertEqual(service.toggle_like(self.post.pk, True), 1)
        self.assertEqual(Like.objects.count(), 1)
        self.assertTrue(service.has_liked(self.post))

    def test_unlike_is_idempotent(self):
        service = LikeService(self.fan)
        service.toggle_like(self.post.pk, True)
        self.assertEqual(service.toggle_like(self.post.pk, False), 0)
        self.assertEqual(service.toggle_like(self.post.pk, False), 0)
        self.assertEqual(self.like_count(), 0)

    def test_count_matches_rows(self):
        LikeService(self.fan).toggle_like(self.post.pk, True)
        LikeService(self.author).toggle_like(self.post.pk, True)
        self.assertEqual(self.like_count(), Like.objects.filter(post=self.post).count())

    def test_like_notifies_author_but_not_self(self):
        LikeService(self.author).toggle_like(self.post.pk, True)
        self.assertFalse(Notification.objects.filter(notification_type="like").exists())
        LikeService(self.fan).toggle_like(self.post.pk, True)
        self.assertEqual(Notification.objects.filter(recipient=self.author, notification_type="like").count(), 1)

    def test_block_after_like_keeps_count(self):
        LikeService(self.fan).toggle_like(self.post.pk, True)
        RelationshipGraph().block(self.author, self.fan)

        for like in (True, False):
            with self.assertRaises(PermissionDenied) as ctx:
                LikeService(self.fan).toggle_like(self.post.pk, like)
            self.assertEqual(ctx.exception.message, "BLOCKED")
        self.assertEqual(self.like_count(), 1)

    def test_unverified_user_cannot_like(self):
        with self.assertRaises(FailedPrecondition):
            LikeService(make_user("newbie", email_verified=False)).toggle_like(self.post.pk, True)
        self.assertEqual(self.like_count(), 0)

    def test_cannot_like_invisible_post(self):
        hidden = make_post(self.author, visibility=Post.VISIBILITY_PRIVATE)
        with self.assertRaises(PermissionDenied) as ctx:
            LikeService(self.fan).toggle_like(hidden.pk, True)
        self.assertEqual(ctx.exception.message, "NOT_VISIBLE")


class ConcurrentLikeTestCase(TestCase):
    def setUp(self):
        self.author = make_user("author")
        self.fan = make_user("fan")
        self.post = make_post(self.author)

    def test_racing_likes_count_once(self):
        with lost_insert_race(Like, lambda: LikeService(self.fan).toggle_like(self.post.pk, True)) as backoff:
            count = LikeService(self.fan).toggle_like(self.post.pk, True)

        backoff.assert_called_once_with(1)
        self.assertEqual(count, 1)
        self.assertEqual(Like.objects.filter(post=self.post, user=self.fan).count(), 1)
        self.assertEqual(Post.objects.get(pk=self.post.pk).like_count, Like.objects.filter(post=self.post).count())
        self.assertEqual(Notification.objects.filter(notification_type="like").count(), 1)

    def test_racing_like_and_unlike_stay_consistent(self):
        def like_then_unlike():
            LikeService(self.fan).toggle_like(self.post.pk, True)
            LikeService(self.fan).toggle_like(self.post.pk, False)

        with lost_insert_race(Like, like_then_unlike):
            count = LikeService(self.fan).toggle_like(self.post.pk, True)

        self.assertEqual(count, 1)
        self.assertEqual(Post.objects.get(pk=self.post.pk).like_count, Like.objects.filter(post=self.post).count())
