from unittest.mock import Mock

from django.contrib.auth.models import AnonymousUser
from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from social.models import Block, FollowEdge, Post
from social.services import RelationshipGraph, VisibilityService
from social.services.visibility import ContentFacts, ViewerContext, resolve_visibility
from social.tests.helpers import make_admin, make_post, make_user


class ResolveVisibilityTestCase(SimpleTestCase):
    """Pure decision table; no database access."""

    author = "author"

    def facts(self, visibility, deleted=False):
        return ContentFacts(author_uid=self.author, visibility=visibility, deleted=deleted)

    def test_public_visible_to_everyone(self):
        content = self.facts(Post.VISIBILITY_PUBLIC)
        self.assertTrue(resolve_visibility(ViewerContext(), content).visible)
        self.assertTrue(resolve_visibility(ViewerContext("viewer"), content).visible)

    def test_followers_only(self):
        content = self.facts(Post.VISIBILITY_FOLLOWERS)
        decision = resolve_visibility(ViewerContext("viewer"), content)
        self.assertFalse(decision.visible)
        self.assertEqual(decision.reason, "NOT_VISIBLE")
        self.assertTrue(resolve_visibility(ViewerContext("viewer"), content, viewer_follows_author=True).visible)
        self.assertTrue(resolve_visibility(ViewerContext(self.author), content).visible)

    def test_private_only_author_or_admin(self):
        content = self.facts(Post.VISIBILITY_PRIVATE)
        self.assertFalse(resolve_visibility(ViewerContext("viewer"), content, viewer_follows_author=True).visible)
        self.assertTrue(resolve_visibility(ViewerContext(self.author), content).visible)
        self.assertTrue(resolve_visibility(ViewerContext("root", is_admin=True), content).visible)

    def test_anonymous_sees_only_public(self):
        for visibility in (Post.VISIBILITY_FOLLOWERS, Post.VISIBILITY_PRIVATE):
            self.assertFalse(resolve_visibility(ViewerContext(), self.facts(visibility)).visible)

    def test_anonymous_ignores_block_flag(self):
        content = self.facts(Post.VISIBILITY_PUBLIC)
        self.assertTrue(resolve_visibility(ViewerContext(), content, blocked=True).visible)

    def test_blocked_viewer(self):
        decision = resolve_visibility(ViewerContext("viewer"), self.facts(Post.VISIBILITY_PUBLIC), blocked=True)
        self.assertFalse(decision.visible)
        self.assertEqual(decision.reason, "BLOCKED")

    def test_deleted_hidden_from_everyone_but_admins(self):
        content = self.facts(Post.VISIBILITY_PUBLIC, deleted=True)
        self.assertEqual(resolve_visibility(ViewerContext(self.author), content).reason, "DELETED")
        self.assertFalse(resolve_visibility(ViewerContext(), content).visible)
        self.assertTrue(resolve_visibility(ViewerContext("root", is_admin=True), content).visible)


class VisibilityServiceTestCase(TestCase):
    def setUp(self):
        self.service = VisibilityService()
        self.author = make_user("author")
        self.follower = make_user("follower")
        self.stranger = make_user("stranger")
        FollowEdge.objects.create(follower=self.follower, followee=self.author)
        self.public = make_post(self.author, visibility=Post.VISIBILITY_PUBLIC)
        self.followers = make_post(self.author, visibility=Post.VISIBILITY_FOLLOWERS)
        self.private = make_post(self.author, visibility=Post.VISIBILITY_PRIVATE)

    def test_followers_post(self):
        self.assertFalse(self.service.can_view_post(self.stranger, self.followers))
        self.assertTrue(self.service.can_view_post(self.follower, self.followers))
        self.assertTrue(self.service.can_view_post(self.author, self.followers))

    def test_private_post(self):
        self.assertTrue(self.service.can_view_post(self.author, self.private))
        self.assertFalse(self.service.can_view_post(self.follower, self.private))
        self.assertFalse(self.service.can_view_post(self.stranger, self.private))

    def test_block_hides_public_post(self):
        Block.objects.create(blocker=self.author, blocked=self.stranger)
        decision = self.service.decide_for_post(self.stranger, self.public)
        self.assertFalse(decision.visible)
        self.assertEqual(decision.reason, "BLOCKED")

    def test_anonymous(self):
        self.assertTrue(self.service.can_view_post(AnonymousUser(), self.public))
        self.assertFalse(self.service.can_view_post(None, self.followers))

    def test_filter_visible_posts(self):
        qs = Post.objects.all()
        self.assertEqual(set(self.service.filter_visible_posts(qs, self.stranger)), {self.public})
        self.assertEqual(set(self.service.filter_visible_posts(qs, self.follower)), {self.public, self.followers})
        self.assertEqual(
            set(self.service.filter_visible_posts(qs, self.author)), {self.public, self.followers, self.private}
        )
        self.assertEqual(set(self.service.filter_visible_posts(qs, AnonymousUser())), {self.public})

    def test_filter_excludes_blocked_and_deleted(self):
        make_post(self.author, deleted_at=timezone.now())
        RelationshipGraph().block(self.follower, self.author)
        qs = Post.objects.all()
        self.assertEqual(list(self.service.filter_visible_posts(qs, self.follower)), [])
        self.assertEqual(len(self.service.filter_visible_posts(qs, make_admin())), 4)

    def test_filter_excludes_authors_who_blocked_the_viewer(self):
        RelationshipGraph().block(self.author, self.stranger)
        self.assertEqual(list(self.service.filter_visible_posts(Post.objects.all(), self.stranger)), [])

    def test_relationship_facts_come_from_the_graph(self):
        graph = Mock(spec=RelationshipGraph)
        graph.is_blocked_pair.return_value = True
        decision = VisibilityService(graph=graph).decide_for_post(self.follower, self.public)
        self.assertEqual(decision.reason, "BLOCKED")
        graph.is_blocked_pair.assert_called_once_with(self.follower, self.author)
        graph.is_following.assert_not_called()
