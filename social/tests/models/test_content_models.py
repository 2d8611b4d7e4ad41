from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from social.models import Comment, Contract, Dispute, Like, Post
from social.tests.helpers import make_contract, make_post, make_user


class PostModelTestCase(TestCase):
    def setUp(self):
        self.author = make_user("alice")

    def test_defaults(self):
        post = make_post(self.author)
        self.assertEqual(post.like_count, 0)
        self.assertEqual(post.comment_count, 0)
        self.assertFalse(post.is_deleted)
        self.assertEqual(post.tags, [])

    def test_is_deleted(self):
        post = make_post(self.author, deleted_at=timezone.now())
        self.assertTrue(post.is_deleted)

    def test_media_asset_lookup(self):
        post = make_post(self.author, media=[{"assetId": "a1", "path": "media/alice/a1.jpg", "kind": "image"}])
        self.assertEqual(post.media_asset("a1")["path"], "media/alice/a1.jpg")
        self.assertIsNone(post.media_asset("missing"))


class LikeModelTestCase(TestCase):
    def test_one_like_per_user_and_post(self):
        author = make_user("alice")
        fan = make_user("bob")
        post = make_post(author)
        Like.objects.create(post=post, user=fan)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Like.objects.create(post=post, user=fan)


class CommentModelTestCase(TestCase):
    def test_replies_cascade_with_parent(self):
        author = make_user("alice")
        post = make_post(author)
        parent = Comment.objects.create(post=post, author=author, body="top")
        Comment.objects.create(post=post, author=author, body="reply", parent=parent)
        parent.delete()
        self.assertFalse(Comment.objects.exists())


class ContractDisputeModelTestCase(TestCase):
    def setUp(self):
        self.artist = make_user("artist")
        self.creator = make_user("creator")
        self.contract = make_contract(self.artist, self.creator)

    def test_parties(self):
        self.assertTrue(self.contract.is_party(self.artist))
        self.assertEqual(self.contract.other_party(self.artist), self.creator)
        self.assertEqual(self.contract.other_party(self.creator), self.artist)
        self.assertFalse(self.contract.is_party(make_user("stranger")))

    def test_dispute_survives_contract_deletion(self):
        dispute = Dispute.objects.create(
            contract=self.contract,
            artist=self.artist,
            creator=self.creator,
            opened_by=self.artist,
            reason_code="other",
            description="late",
        )
        self.contract.delete()
        dispute.refresh_from_db()
        self.assertIsNone(dispute.contract_id)
        self.assertEqual(Contract.objects.count(), 0)
