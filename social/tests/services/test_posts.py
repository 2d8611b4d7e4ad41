import uuid

from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from social.errors import FailedPrecondition, InvalidArgument, NotFound, PermissionDenied
from social.models import Block, FollowEdge, Post, Role
from social.services import PostService
from social.services.posts import _clean_tags, soft_delete_post
from social.tests.helpers import make_admin, make_post, make_user


class CleanTagsTestCase(TestCase):
    def test_normalizes_and_dedupes(self):
        self.assertEqual(_clean_tags(["#Ink", "ink", " Comics ", ""]), ["ink", "comics"])
        self.assertEqual(_clean_tags(None), [])


class PostServiceTestCase(TestCase):
    def setUp(self):
        self.author = make_user("author")
        self.viewer = make_user("viewer")

    def test_create_post(self):
        post = PostService(self.author).create_post(" first ", Post.VISIBILITY_FOLLOWERS, tags=["#Art"])
        self.assertEqual(post.caption, "first")
        self.assertEqual(post.tags, ["art"])
        self.assertEqual(post.like_count, 0)
        self.assertEqual(post.comment_count, 0)

    def test_create_post_requires_role(self):
        with self.assertRaises(PermissionDenied):
            PostService(make_user("nobody", role=Role.UNASSIGNED)).create_post("x", Post.VISIBILITY_PUBLIC)
        with self.assertRaises(FailedPrecondition):
            PostService(make_user("unverified", email_verified=False)).create_post("x", Post.VISIBILITY_PUBLIC)

    def test_create_post_invalid_visibility(self):
        with self.assertRaises(InvalidArgument):
            PostService(self.author).create_post("x", "friends")

    def test_update_post(self):
        post = make_post(self.author)
        updated = PostService(self.author).update_post(post.pk, caption="edited", visibility=Post.VISIBILITY_PRIVATE)
        self.assertEqual(updated.caption, "edited")
        self.assertEqual(Post.objects.get(pk=post.pk).visibility, Post.VISIBILITY_PRIVATE)

    def test_update_post_not_owner(self):
        post = make_post(self.author)
        with self.assertRaises(PermissionDenied) as ctx:
            PostService(self.viewer).update_post(post.pk, caption="mine now")
        self.assertEqual(ctx.exception.message, "NOT_OWNER")

    def test_update_post_no_changes(self):
        post = make_post(self.author)
        with self.assertRaises(InvalidArgument):
            PostService(self.author).update_post(post.pk, like_count=10)

    def test_delete_post_is_soft_and_idempotent(self):
        post = make_post(self.author)
        service = PostService(self.author)
        service.delete_post(post.pk)
        first = Post.objects.get(pk=post.pk)
        self.assertIsNotNone(first.deleted_at)
        self.assertEqual(first.deleted_by, self.author)
        service.delete_post(post.pk)
        self.assertEqual(Post.objects.get(pk=post.pk).deleted_at, first.deleted_at)

    def test_admin_can_delete_any_post(self):
        post = make_post(self.author)
        PostService(make_admin()).delete_post(post.pk)
        self.assertTrue(Post.objects.get(pk=post.pk).is_deleted)

    def test_soft_delete_helper(self):
        post = make_post(self.author)
        self.assertTrue(soft_delete_post(post, self.author))
        self.assertFalse(soft_delete_post(post, self.author))

    def test_get_post_visibility(self):
        post = make_post(self.author, visibility=Post.VISIBILITY_FOLLOWERS)
        with self.assertRaises(PermissionDenied) as ctx:
            PostService(self.viewer).get_post(post.pk)
        self.assertEqual(ctx.exception.message, "NOT_VISIBLE")
        FollowEdge.objects.create(follower=self.viewer, followee=self.author)
        self.assertEqual(PostService(self.viewer).get_post(post.pk), post)

    def test_get_post_blocked(self):
        post = make_post(self.author)
        Block.objects.create(blocker=self.author, blocked=self.viewer)
        with self.assertRaises(PermissionDenied) as ctx:
            PostService(self.viewer).get_post(post.pk)
        self.assertEqual(ctx.exception.message, "BLOCKED")

    def test_get_deleted_post_is_not_found(self):
        post = make_post(self.author)
        soft_delete_post(post, self.author)
        with self.assertRaises(NotFound):
            PostService(self.author).get_post(post.pk)
        self.assertEqual(PostService(make_admin()).get_post(post.pk), post)

    def test_get_missing_post(self):
        with self.assertRaises(NotFound):
            PostService(AnonymousUser()).get_post(uuid.uuid4())

    def test_list_user_posts(self):
        public = make_post(self.author)
        make_post(self.author, visibility=Post.VISIBILITY_PRIVATE)
        self.assertEqual(PostService(self.viewer).list_user_posts(self.author), [public])
        self.assertEqual(PostService(AnonymousUser()).list_user_posts(self.author), [public])
        self.assertEqual(len(PostService(self.author).list_user_posts(self.author)), 2)
        self.assertEqual(len(PostService(self.author).list_user_posts(self.author, limit=1)), 1)
