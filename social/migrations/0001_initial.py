import django.contrib.auth.models
import django.db.models.deletion
import django.utils.timezone
import social.utils.uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("is_staff", models.BooleanField(default=False, help_text="Designates whether the user can log into this admin site.", verbose_name="staff status")),
                ("is_active", models.BooleanField(default=True, help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.", verbose_name="active")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("username", models.CharField(max_length=128, unique=True)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("role", models.CharField(choices=[("unassigned", "Unassigned"), ("artist", "Artist"), ("creator", "Creator"), ("admin", "Admin")], default="unassigned", max_length=20)),
                ("email_verified", models.BooleanField(default=False)),
                ("status", models.CharField(choices=[("active", "Active"), ("suspended", "Suspended")], default="active", max_length=20)),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "db_table": "users",
                "ordering": ["date_joined", "id"],
            },
            managers=[
                ("objects", django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="PublicProfile",
            fields=[
                ("user", models.OneToOneField(db_column="uid", on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name="public_profile", serialize=False, to=settings.AUTH_USER_MODEL)),
                ("handle", models.CharField(max_length=24, unique=True)),
                ("display_name", models.CharField(blank=True, default="", max_length=60)),
                ("bio", models.TextField(blank=True, default="", max_length=500)),
                ("is_private_account", models.BooleanField(default=False)),
                ("follower_count", models.PositiveIntegerField(default=0)),
                ("avatar_asset_id", models.CharField(blank=True, max_length=200, null=True)),
                ("handle_changed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "public_profiles",
            },
        ),
        migrations.CreateModel(
            name="CreatorProfile",
            fields=[
                ("user", models.OneToOneField(db_column="uid", on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name="creator_profile", serialize=False, to=settings.AUTH_USER_MODEL)),
                ("verification_status", models.CharField(choices=[("unverified", "Unverified"), ("pending", "Pending"), ("verified", "Verified"), ("rejected", "Rejected")], default="unverified", max_length=20)),
                ("evidence_paths", models.JSONField(blank=True, default=list)),
                ("verification_notes", models.TextField(blank=True, null=True)),
                ("verification_requested_at", models.DateTimeField(blank=True, null=True)),
                ("verification_reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("payout_onboarding_status", models.CharField(default="not_started", max_length=40)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("verification_reviewed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "creator_profiles",
            },
        ),
        migrations.CreateModel(
            name="Block",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("blocker", models.ForeignKey(db_column="blocker_uid", on_delete=django.db.models.deletion.CASCADE, related_name="blocks_made", to=settings.AUTH_USER_MODEL)),
                ("blocked", models.ForeignKey(db_column="blocked_uid", on_delete=django.db.models.deletion.CASCADE, related_name="blocks_received", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "blocks",
                "indexes": [models.Index(fields=["blocked"], name="blocks_blocked_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("blocker", "blocked"), name="uniq_blocks_blocker_blocked"),
                    models.CheckConstraint(condition=models.Q(("blocker", models.F("blocked")), _negated=True), name="chk_blocks_not_self"),
                ],
            },
        ),
        migrations.CreateModel(
            name="FollowRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], default="pending", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("decided_at", models.DateTimeField(blank=True, null=True)),
                ("from_user", models.ForeignKey(db_column="from_uid", on_delete=django.db.models.deletion.CASCADE, related_name="follow_requests_sent", to=settings.AUTH_USER_MODEL)),
                ("to_user", models.ForeignKey(db_column="to_uid", on_delete=django.db.models.deletion.CASCADE, related_name="follow_requests_received", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "follow_requests",
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("status", "rejected"), _negated=True), fields=("from_user", "to_user"), name="uniq_follow_requests_live_pair"),
                    models.CheckConstraint(condition=models.Q(("from_user", models.F("to_user")), _negated=True), name="chk_follow_requests_not_self"),
                ],
            },
        ),
        migrations.CreateModel(
            name="FollowEdge",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("follower", models.ForeignKey(db_column="follower_uid", on_delete=django.db.models.deletion.CASCADE, related_name="following_edges", to=settings.AUTH_USER_MODEL)),
                ("followee", models.ForeignKey(db_column="followee_uid", on_delete=django.db.models.deletion.CASCADE, related_name="follower_edges", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "follow_edges",
                "indexes": [models.Index(fields=["followee"], name="follow_edges_followee_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("follower", "followee"), name="uniq_follow_edges_pair"),
                    models.CheckConstraint(condition=models.Q(("follower", models.F("followee")), _negated=True), name="chk_follow_edges_not_self"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Post",
            fields=[
                ("id", models.UUIDField(default=social.utils.uuid.uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("caption", models.TextField(max_length=2000)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("media", models.JSONField(blank=True, default=list)),
                ("visibility", models.CharField(choices=[("public", "Public"), ("followers", "Followers only"), ("private", "Only me")], default="public", max_length=20)),
                ("like_count", models.PositiveIntegerField(default=0)),
                ("comment_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("author", models.ForeignKey(db_column="author_uid", on_delete=django.db.models.deletion.CASCADE, related_name="posts", to=settings.AUTH_USER_MODEL)),
                ("deleted_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "posts",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["author", "created_at"], name="posts_author_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="Comment",
            fields=[
                ("id", models.UUIDField(default=social.utils.uuid.uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("body", models.TextField(max_length=1000)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("author", models.ForeignKey(db_column="author_uid", on_delete=django.db.models.deletion.CASCADE, related_name="comments", to=settings.AUTH_USER_MODEL)),
                ("parent", models.ForeignKey(blank=True, db_column="parent_comment_id", null=True, on_delete=django.db.models.deletion.CASCADE, related_name="replies", to="social.comment")),
                ("post", models.ForeignKey(db_column="post_id", on_delete=django.db.models.deletion.CASCADE, related_name="comments", to="social.post")),
            ],
            options={
                "db_table": "comments",
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="Like",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(db_column="uid", on_delete=django.db.models.deletion.CASCADE, related_name="likes", to=settings.AUTH_USER_MODEL)),
                ("post", models.ForeignKey(db_column="post_id", on_delete=django.db.models.deletion.CASCADE, related_name="likes", to="social.post")),
            ],
            options={
                "db_table": "likes",
                "constraints": [models.UniqueConstraint(fields=("post", "user"), name="uniq_likes_post_user")],
            },
        ),
        migrations.CreateModel(
            name="Report",
            fields=[
                ("id", models.UUIDField(default=social.utils.uuid.uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("target_type", models.CharField(choices=[("post", "Post"), ("comment", "Comment"), ("user", "User")], max_length=20)),
                ("target_id", models.CharField(max_length=128)),
                ("reason_code", models.CharField(choices=[("spam", "Spam"), ("harassment", "Harassment"), ("hate", "Hate"), ("sexual", "Sexual content"), ("copyright", "Copyright"), ("impersonation", "Impersonation"), ("other", "Other")], max_length=50)),
                ("message", models.TextField(max_length=2000)),
                ("status", models.CharField(choices=[("open", "Open"), ("resolved", "Resolved"), ("dismissed", "Dismissed")], default="open", max_length=20)),
                ("admin_note", models.TextField(blank=True, null=True)),
                ("resolved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("reporter", models.ForeignKey(db_column="reporter_uid", on_delete=django.db.models.deletion.CASCADE, related_name="submitted_reports", to=settings.AUTH_USER_MODEL)),
                ("target_user", models.ForeignKey(blank=True, db_column="target_uid", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reports_against", to=settings.AUTH_USER_MODEL)),
                ("post", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reports", to="social.post")),
                ("comment", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reports", to="social.comment")),
                ("resolved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "reports",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["status", "created_at"], name="reports_status_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="Contract",
            fields=[
                ("id", models.UUIDField(default=social.utils.uuid.uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("status", models.CharField(choices=[("active", "Active"), ("disputed", "Disputed"), ("completed", "Completed"), ("cancelled", "Cancelled")], default="active", max_length=20)),
                ("total_price_cents", models.PositiveIntegerField(default=0)),
                ("payment_status", models.CharField(choices=[("unpaid", "Unpaid"), ("paid", "Paid"), ("refunded", "Refunded"), ("partial_refund", "Partially refunded")], default="unpaid", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("artist", models.ForeignKey(db_column="artist_uid", on_delete=django.db.models.deletion.CASCADE, related_name="artist_contracts", to=settings.AUTH_USER_MODEL)),
                ("creator", models.ForeignKey(db_column="creator_uid", on_delete=django.db.models.deletion.CASCADE, related_name="creator_contracts", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "contracts",
            },
        ),
        migrations.CreateModel(
            name="Dispute",
            fields=[
                ("id", models.UUIDField(default=social.utils.uuid.uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("reason_code", models.CharField(choices=[("non_delivery", "Non delivery"), ("wrong_music", "Wrong music"), ("missing_disclosure", "Missing disclosure"), ("late_post", "Late post"), ("quality_issue", "Quality issue"), ("other", "Other")], max_length=40)),
                ("description", models.TextField(max_length=2000)),
                ("evidence_paths", models.JSONField(blank=True, default=list)),
                ("status", models.CharField(choices=[("open", "Open"), ("under_review", "Under review"), ("resolved", "Resolved")], default="open", max_length=20)),
                ("outcome", models.CharField(blank=True, choices=[("resolved_refund", "Full refund"), ("resolved_no_refund", "No refund"), ("resolved_partial_refund", "Partial refund")], max_length=40, null=True)),
                ("refund_cents", models.PositiveIntegerField(default=0)),
                ("resolution_notes", models.TextField(blank=True, null=True)),
                ("resolved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("contract", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="disputes", to="social.contract")),
                ("artist", models.ForeignKey(db_column="artist_uid", on_delete=django.db.models.deletion.CASCADE, related_name="artist_disputes", to=settings.AUTH_USER_MODEL)),
                ("creator", models.ForeignKey(db_column="creator_uid", on_delete=django.db.models.deletion.CASCADE, related_name="creator_disputes", to=settings.AUTH_USER_MODEL)),
                ("opened_by", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="+", to=settings.AUTH_USER_MODEL)),
                ("resolved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "disputes",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Thread",
            fields=[
                ("id", models.UUIDField(default=social.utils.uuid.uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("last_message_at", models.DateTimeField(blank=True, null=True)),
                ("last_message_preview", models.CharField(blank=True, default="", max_length=140)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("participants", models.ManyToManyField(related_name="threads", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "threads",
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                ("id", models.UUIDField(default=social.utils.uuid.uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("text", models.TextField(max_length=2000)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("thread", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="messages", to="social.thread")),
                ("sender", models.ForeignKey(db_column="sender_uid", on_delete=django.db.models.deletion.CASCADE, related_name="sent_messages", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "messages",
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("notification_type", models.CharField(choices=[("follow", "Follow"), ("follow_request", "Follow Request"), ("like", "Like"), ("comment", "Comment"), ("message", "Message"), ("dispute_opened", "Dispute opened"), ("dispute_resolved", "Dispute resolved"), ("verification_requested", "Verification requested"), ("verification_decision", "Verification decision"), ("admin_message", "Admin message")], max_length=30)),
                ("title", models.CharField(blank=True, default="", max_length=120)),
                ("body", models.CharField(blank=True, default="", max_length=500)),
                ("link", models.CharField(blank=True, default="", max_length=200)),
                ("is_read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("recipient", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
                ("sender", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="sent_notifications", to=settings.AUTH_USER_MODEL)),
                ("follow_request", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to="social.followrequest")),
            ],
            options={
                "db_table": "notifications",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="RateLimitBucket",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(max_length=200, unique=True)),
                ("uid", models.CharField(max_length=128)),
                ("action", models.CharField(max_length=60)),
                ("window", models.CharField(max_length=10)),
                ("bucket", models.CharField(max_length=40)),
                ("count", models.PositiveIntegerField(default=0)),
                ("reset_at", models.DateTimeField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "rate_limits",
            },
        ),
    ]
