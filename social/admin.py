from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from django.urls import reverse
from social.models import Block, Dispute, FollowEdge, FollowRequest, Post, PublicProfile, Report, User
from social.services.posts import soft_delete_post
from social.transactions import run_in_transaction


class ReportInline(admin.StackedInline):
    """Show open reports directly on the Post page in Admin."""
    model = Report
    fk_name = "post"
    extra = 0
    readonly_fields = ["reporter", "reason_code", "message", "created_at"]

    def get_queryset(self, request):
        """Only show open reports inline."""
        return super().get_queryset(request).filter(status=Report.STATUS_OPEN)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Adds role, email verification and account status to the stock user admin."""
    list_display = ("username", "email", "role", "email_verified", "status", "date_joined")
    list_filter = ("role", "status", "email_verified")
    fieldsets = BaseUserAdmin.fieldsets + (("Marketplace", {"fields": ("role", "email_verified", "status")}),)


@admin.register(PublicProfile)
class PublicProfileAdmin(admin.ModelAdmin):
    list_display = ("handle", "user", "is_private_account", "follower_count")
    search_fields = ("handle", "display_name", "user__username")
    # follower_count belongs to the counter primitive
    readonly_fields = ("follower_count", "handle_changed_at")


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    """Admin configuration for posts with a takedown action."""
    list_display = ("id", "author", "visibility", "created_at", "deleted_at", "report_count_display")
    list_filter = ("visibility", "created_at")
    search_fields = ("caption", "author__username")
    readonly_fields = ("like_count", "comment_count")
    actions = ["take_down"]
    inlines = [ReportInline]

    def report_count_display(self, obj):
        """Return formatted count of open reports."""
        count = obj.reports.filter(status=Report.STATUS_OPEN).count()
        if count > 0:
            return format_html('<span style="color:red; font-weight:bold;">{} Reports</span>', count)
        return "0"
    report_count_display.short_description = "Open Reports"

    @admin.action(description="Take down selected posts (soft delete)")
    def take_down(self, request, queryset):
        """Soft-delete through the same primitive authors use."""
        def _apply():
            for post in queryset.select_for_update():
                soft_delete_post(post, request.user)
        run_in_transaction(_apply)


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    """Read-mostly view of reports; resolution goes through the moderation endpoints."""
    list_display = ("target_object", "reason_code", "reporter", "status", "created_at")
    list_filter = ("status", "reason_code", "target_type", "created_at")
    readonly_fields = ("status", "resolved_by", "resolved_at")

    def target_object(self, obj):
        """Return a link to the reported object for quick navigation."""
        if obj.target_type == Report.TARGET_POST and obj.post_id:
            link = reverse("admin:social_post_change", args=[obj.post_id])
            return format_html('<a href="{}">Post: {}</a>', link, obj.post_id)
        if obj.target_type == Report.TARGET_USER and obj.target_user_id:
            link = reverse("admin:social_user_change", args=[obj.target_user_id])
            return format_html('<a href="{}">User: {}</a>', link, obj.target_id)
        if obj.comment_id:
            return f"Comment: {obj.comment_id}"
        return "Deleted Content"
    target_object.short_description = "Reported Content"


@admin.register(Dispute)
class DisputeAdmin(admin.ModelAdmin):
    list_display = ("id", "contract", "status", "outcome", "refund_cents", "created_at")
    list_filter = ("status", "outcome")
    readonly_fields = ("status", "outcome", "refund_cents", "resolved_by", "resolved_at")


admin.site.register(Block)
admin.site.register(FollowEdge)
admin.site.register(FollowRequest)
