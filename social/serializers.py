"""Request schemas for the social procedures and read serializers for responses."""

from rest_framework import serializers

from social.models import Dispute, Post, PublicProfile, Report

REPORT_REASONS = [code for code, _ in Report.REPORT_REASONS]


class StrictSerializer(serializers.Serializer):
    """Rejects keys the schema does not declare."""

    def validate(self, attrs):
        unknown = set(getattr(self, "initial_data", {}) or {}) - set(self.fields)
        if unknown:
            raise serializers.ValidationError(
                {key: ["Unexpected field."] for key in sorted(unknown)}
            )
        return attrs


def _uid_field(**kwargs):
    return serializers.CharField(min_length=1, max_length=128, **kwargs)


# Relationships

class TargetUserSchema(StrictSerializer):
    targetUid = _uid_field()


class FollowerSchema(StrictSerializer):
    followerUid = _uid_field()


class DecideFollowRequestSchema(StrictSerializer):
    fromUid = _uid_field()
    decision = serializers.ChoiceField(choices=["approve", "reject"])


# Identity

class SetInitialRoleSchema(StrictSerializer):
    role = serializers.ChoiceField(choices=["artist", "creator"])


class RequestCreatorVerificationSchema(StrictSerializer):
    evidencePaths = serializers.ListField(
        child=serializers.CharField(min_length=3, max_length=200),
        allow_empty=True,
        max_length=5,
    )
    notes = serializers.CharField(max_length=1000, required=False, allow_null=True, allow_blank=True)


class AdminSetCreatorVerificationSchema(StrictSerializer):
    creatorUid = _uid_field()
    status = serializers.ChoiceField(choices=["verified", "rejected"])
    notes = serializers.CharField(max_length=1000, required=False, allow_null=True, allow_blank=True)


class AdminChangeUserRoleSchema(StrictSerializer):
    uid = _uid_field()
    role = serializers.ChoiceField(choices=["artist", "creator", "admin"])


class AdminSetUserStatusSchema(StrictSerializer):
    uid = _uid_field()
    status = serializers.ChoiceField(choices=["active", "suspended"])


# Profiles

class SetAccountPrivacySchema(StrictSerializer):
    isPrivateAccount = serializers.BooleanField()


class UpdateProfileSchema(StrictSerializer):
    displayName = serializers.CharField(min_length=3, max_length=60, required=False)
    bio = serializers.CharField(max_length=500, required=False, allow_null=True, allow_blank=True)
    avatarAssetId = serializers.CharField(max_length=200, required=False, allow_null=True)


class ClaimHandleSchema(StrictSerializer):
    handle = serializers.CharField(min_length=3, max_length=24)


class GetProfileSchema(StrictSerializer):
    handle = serializers.CharField(min_length=1, max_length=40)


# Posts, comments, likes, media

class MediaItemSchema(serializers.Serializer):
    assetId = serializers.CharField(min_length=1, max_length=100)
    path = serializers.CharField(min_length=3, max_length=300)
    kind = serializers.ChoiceField(choices=["image", "video", "audio"])


class CreatePostSchema(StrictSerializer):
    caption = serializers.CharField(min_length=1, max_length=2000)
    tags = serializers.ListField(
        child=serializers.CharField(min_length=1, max_length=32), max_length=25, required=False, default=list
    )
    visibility = serializers.ChoiceField(choices=[c for c, _ in Post.VISIBILITY_CHOICES])
    media = serializers.ListField(child=MediaItemSchema(), max_length=10, required=False, default=list)


class UpdatePostSchema(StrictSerializer):
    postId = serializers.UUIDField()
    caption = serializers.CharField(min_length=1, max_length=2000, required=False)
    tags = serializers.ListField(child=serializers.CharField(min_length=1, max_length=32), max_length=25, required=False)
    visibility = serializers.ChoiceField(choices=[c for c, _ in Post.VISIBILITY_CHOICES], required=False)


class PostRefSchema(StrictSerializer):
    postId = serializers.UUIDField()


class CreateCommentSchema(StrictSerializer):
    postId = serializers.UUIDField()
    body = serializers.CharField(min_length=1, max_length=1000)
    parentCommentId = serializers.UUIDField(required=False, allow_null=True)


class DeleteCommentSchema(StrictSerializer):
    postId = serializers.UUIDField()
    commentId = serializers.UUIDField()


class ToggleLikeSchema(StrictSerializer):
    postId = serializers.UUIDField()
    like = serializers.BooleanField()


class AccessMediaSchema(StrictSerializer):
    postId = serializers.UUIDField()
    assetId = serializers.CharField(min_length=1, max_length=100)


class UserPostsSchema(StrictSerializer):
    uid = _uid_field()
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False, default=20)


# Messaging

class SendMessageSchema(StrictSerializer):
    threadId = serializers.UUIDField()
    text = serializers.CharField(min_length=1, max_length=2000)


# Moderation

class ReportPostSchema(StrictSerializer):
    postId = serializers.UUIDField()
    reasonCode = serializers.ChoiceField(choices=[r for r in REPORT_REASONS if r != "impersonation"])
    message = serializers.CharField(min_length=1, max_length=2000)


class ReportCommentSchema(ReportPostSchema):
    commentId = serializers.UUIDField()


class ReportUserSchema(StrictSerializer):
    targetUid = _uid_field()
    reasonCode = serializers.ChoiceField(choices=[r for r in REPORT_REASONS if r != "copyright"])
    message = serializers.CharField(min_length=1, max_length=2000)


class AdminResolveReportSchema(StrictSerializer):
    reportId = serializers.UUIDField()
    status = serializers.ChoiceField(choices=[Report.STATUS_RESOLVED, Report.STATUS_DISMISSED])
    adminNote = serializers.CharField(max_length=2000, required=False, allow_null=True, allow_blank=True)
    blockTarget = serializers.BooleanField(required=False, default=False)
    takedown = serializers.BooleanField(required=False, default=False)


class OpenDisputeSchema(StrictSerializer):
    contractId = serializers.UUIDField()
    reasonCode = serializers.ChoiceField(choices=[c for c, _ in Dispute.REASONS])
    description = serializers.CharField(min_length=1, max_length=2000)
    evidencePaths = serializers.ListField(
        child=serializers.CharField(min_length=3, max_length=300), max_length=5, required=False, default=list
    )


class DisputeRefSchema(StrictSerializer):
    disputeId = serializers.UUIDField()


class AdminResolveDisputeSchema(StrictSerializer):
    disputeId = serializers.UUIDField()
    outcome = serializers.ChoiceField(choices=[c for c, _ in Dispute.OUTCOMES])
    refundCents = serializers.IntegerField(min_value=0, max_value=500000)
    notes = serializers.CharField(min_length=1, max_length=2000)
    blockUid = _uid_field(required=False, allow_null=True)


# Read serializers

class PublicProfileSerializer(serializers.ModelSerializer):
    """Public profile as shown to other users."""
    uid = serializers.CharField(source="user.username", read_only=True)
    displayName = serializers.CharField(source="display_name", read_only=True)
    isPrivateAccount = serializers.BooleanField(source="is_private_account", read_only=True)
    followerCount = serializers.IntegerField(source="follower_count", read_only=True)
    avatarUrl = serializers.CharField(source="avatar_url", read_only=True)

    class Meta:
        model = PublicProfile
        fields = ["uid", "handle", "displayName", "bio", "isPrivateAccount", "followerCount", "avatarUrl"]


class PostSerializer(serializers.ModelSerializer):
    """Post payload returned to viewers that pass the visibility check."""
    postId = serializers.UUIDField(source="id", read_only=True)
    authorUid = serializers.CharField(source="author.username", read_only=True)
    likeCount = serializers.IntegerField(source="like_count", read_only=True)
    commentCount = serializers.IntegerField(source="comment_count", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    deletedAt = serializers.DateTimeField(source="deleted_at", read_only=True)

    class Meta:
        model = Post
        fields = [
            "postId",
            "authorUid",
            "caption",
            "tags",
            "visibility",
            "media",
            "likeCount",
            "commentCount",
            "createdAt",
            "deletedAt",
        ]
