from social.serializers import (
    AdminResolveDisputeSchema,
    AdminResolveReportSchema,
    DisputeRefSchema,
    OpenDisputeSchema,
    ReportCommentSchema,
    ReportPostSchema,
    ReportUserSchema,
)
from social.services.moderation import DisputeService, ReportService
from social.views.rpc import procedure


@procedure("reportPost", ReportPostSchema, rate_limited=True)
def report_post(request, data):
    report = ReportService(request.user).report_post(data["postId"], data["reasonCode"], data["message"])
    return {"reportId": str(report.pk)}


@procedure("reportComment", ReportCommentSchema, rate_limited=True)
def report_comment(request, data):
    report = ReportService(request.user).report_comment(
        data["postId"], data["commentId"], data["reasonCode"], data["message"]
    )
    return {"reportId": str(report.pk)}


@procedure("reportUser", ReportUserSchema, rate_limited=True)
def report_user(request, data):
    report = ReportService(request.user).report_user(data["targetUid"], data["reasonCode"], data["message"])
    return {"reportId": str(report.pk)}


@procedure("adminResolveReport", AdminResolveReportSchema)
def admin_resolve_report(request, data):
    ReportService(request.user).admin_resolve_report(
        data["reportId"],
        data["status"],
        admin_note=data.get("adminNote"),
        block_target=data["blockTarget"],
        takedown=data["takedown"],
    )


@procedure("openDispute", OpenDisputeSchema, social=False, rate_limited=True)
def open_dispute(request, data):
    dispute = DisputeService(request.user).open_dispute(
        data["contractId"], data["reasonCode"], data["description"], data.get("evidencePaths")
    )
    return {"disputeId": str(dispute.pk)}


@procedure("adminReviewDispute", DisputeRefSchema, social=False)
def admin_review_dispute(request, data):
    DisputeService(request.user).admin_review_dispute(data["disputeId"])


@procedure("adminResolveDispute", AdminResolveDisputeSchema, social=False)
def admin_resolve_dispute(request, data):
    DisputeService(request.user).admin_resolve_dispute(
        data["disputeId"],
        data["outcome"],
        data["refundCents"],
        data["notes"],
        block_uid=data.get("blockUid"),
    )
