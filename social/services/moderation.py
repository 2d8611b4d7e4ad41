"""
Moderation pipeline: user reports and marketplace disputes.

Admin sanctions never write blocks or deletions directly. A block goes through
`RelationshipGraph.block` and a takedown through the same soft-delete / comment
removal primitives the authors use, so follow edges, follower counts and
comment counts stay consistent whoever acts.
"""

import logging

from django.utils import timezone

from social.errors import FailedPrecondition, InvalidArgument, NotFound, PermissionDenied
from social.models import Comment, Contract, Dispute, Post, Report, Role
from social.services.comments import remove_comment
from social.services.email import send_email
from social.services.gate import InteractionGate
from social.services.identity import get_user_by_uid, require_admin
from social.services.notifications import NotificationService
from social.services.payments import get_payment_provider
from social.services.posts import soft_delete_post
from social.services.relationships import RelationshipGraph
from social.services.visibility import VisibilityService
from social.transactions import run_in_transaction

logger = logging.getLogger(__name__)

REPORT_DECISIONS = (Report.STATUS_RESOLVED, Report.STATUS_DISMISSED)
DISPUTE_PARTY_ROLES = (Role.ARTIST, Role.CREATOR)
MAX_EVIDENCE_PATHS = 5


class ReportService:
    def __init__(self, actor, graph=None, visibility=None):
        self.actor = actor
        self.graph = graph or RelationshipGraph()
        self.visibility = visibility or VisibilityService()

    def _readable_post(self, post_id):
        """Posts the reporter cannot read are reported as missing."""
        post = Post.objects.select_related("author").filter(pk=post_id).first()
        if post is None or post.is_deleted or not self.visibility.can_view_post(self.actor, post):
            raise NotFound("POST_NOT_FOUND")
        return post

    def report_post(self, post_id, reason_code, message):
        InteractionGate(self.actor).require_active()
        post = self._readable_post(post_id)
        return Report.objects.create(
            reporter=self.actor,
            target_type=Report.TARGET_POST,
            target_id=str(post.pk),
            target_user=post.author,
            post=post,
            reason_code=reason_code,
            message=message,
        )

    def report_comment(self, post_id, comment_id, reason_code, message):
        InteractionGate(self.actor).require_active()
        post = self._readable_post(post_id)
        comment = Comment.objects.select_related("author").filter(pk=comment_id, post=post).first()
        if comment is None:
            raise NotFound("COMMENT_NOT_FOUND")
        return Report.objects.create(
            reporter=self.actor,
            target_type=Report.TARGET_COMMENT,
            target_id=str(comment.pk),
            target_user=comment.author,
            post=post,
            comment=comment,
            reason_code=reason_code,
            message=message,
        )

    def report_user(self, target_uid, reason_code, message):
        InteractionGate(self.actor).require_active()
        if target_uid == self.actor.username:
            raise InvalidArgument("CANNOT_REPORT_SELF")
        target = get_user_by_uid(target_uid)
        return Report.objects.create(
            reporter=self.actor,
            target_type=Report.TARGET_USER,
            target_id=target.username,
            target_user=target,
            reason_code=reason_code,
            message=message,
        )

    def open_reports(self):
        require_admin(self.actor)
        return Report.objects.filter(status=Report.STATUS_OPEN).select_related("reporter", "target_user")

    def admin_resolve_report(self, report_id, status, admin_note=None, block_target=False, takedown=False):
        """`open -> resolved|dismissed`; sanctions apply only when resolving."""
        require_admin(self.actor)
        if status not in REPORT_DECISIONS:
            raise InvalidArgument("INVALID_STATUS")
        if status != Report.STATUS_RESOLVED and (block_target or takedown):
            raise InvalidArgument("SANCTION_REQUIRES_RESOLVED")
        return run_in_transaction(self._resolve, report_id, status, admin_note, block_target, takedown)

    def _resolve(self, report_id, status, admin_note, block_target, takedown):
        report = Report.objects.select_for_update().filter(pk=report_id).first()
        if report is None:
            raise NotFound("REPORT_NOT_FOUND")
        if not report.is_open:
            raise FailedPrecondition("REPORT_NOT_OPEN")

        # takedown before block: post row first, profile pair second, same order as the gate
        if takedown:
            self._take_down(report)
        if block_target:
            if report.target_user_id is None:
                raise FailedPrecondition("TARGET_USER_MISSING")
            if report.target_user_id != report.reporter_id:
                self.graph.block(report.reporter, report.target_user)

        report.status = status
        report.admin_note = admin_note or None
        report.resolved_by = self.actor
        report.resolved_at = timezone.now()
        report.save()
        logger.info(
            "Report %s %s by %s (block=%s, takedown=%s)",
            report.pk,
            status,
            self.actor.username,
            block_target,
            takedown,
        )
        return report

    def _take_down(self, report):
        if report.target_type == Report.TARGET_USER:
            raise InvalidArgument("TAKEDOWN_NOT_APPLICABLE")
        if report.target_type == Report.TARGET_POST:
            post = Post.objects.select_for_update().filter(pk=report.post_id).first()
            if post is None:
                raise NotFound("POST_NOT_FOUND")
            soft_delete_post(post, self.actor)
            return
        if report.comment_id is None:
            # already removed; nothing left to take down
            return
        Post.objects.select_for_update().filter(pk=report.post_id).first()
        comment = Comment.objects.filter(pk=report.comment_id).first()
        if comment is not None:
            remove_comment(comment)
        report.comment = None


class DisputeService:
    def __init__(self, actor, graph=None, notifications=None, provider=None):
        self.actor = actor
        self.graph = graph or RelationshipGraph()
        self.notifications = notifications or NotificationService()
        self._provider = provider

    @property
    def provider(self):
        if self._provider is None:
            self._provider = get_payment_provider()
        return self._provider

    def open_dispute(self, contract_id, reason_code, description, evidence_paths=None):
        InteractionGate(self.actor).require_writer()
        if self.actor.role not in DISPUTE_PARTY_ROLES:
            raise PermissionDenied("ROLE_NOT_ALLOWED")
        paths = list(evidence_paths or [])
        if len(paths) > MAX_EVIDENCE_PATHS:
            raise InvalidArgument("TOO_MANY_EVIDENCE_PATHS")
        prefix = f"disputeEvidence/{contract_id}/{self.actor.username}/"
        if any(not p.startswith(prefix) or ".." in p for p in paths):
            raise InvalidArgument("EVIDENCE_PATH_INVALID")
        return run_in_transaction(self._open, contract_id, reason_code, description, paths)

    def _open(self, contract_id, reason_code, description, paths):
        contract = Contract.objects.select_for_update().filter(pk=contract_id).first()
        if contract is None:
            raise NotFound("CONTRACT_NOT_FOUND")
        if not contract.is_party(self.actor):
            raise PermissionDenied("NOT_PARTY")
        if contract.status != Contract.STATUS_ACTIVE:
            raise FailedPrecondition("CONTRACT_NOT_DISPUTABLE")

        dispute = Dispute.objects.create(
            contract=contract,
            artist_id=contract.artist_id,
            creator_id=contract.creator_id,
            opened_by=self.actor,
            reason_code=reason_code,
            description=description,
            evidence_paths=paths,
        )
        contract.status = Contract.STATUS_DISPUTED
        contract.save(update_fields=["status", "updated_at"])

        other = contract.other_party(self.actor)
        self.notifications.notify(
            other,
            "dispute_opened",
            sender=self.actor,
            title="Dispute opened",
            body="A dispute was opened for a contract you are part of.",
            link=f"/contracts/{contract.pk}",
        )
        self.notifications.notify_admins(
            "dispute_opened",
            sender=self.actor,
            title="Dispute opened",
            body=f"Dispute {dispute.pk} opened for contract {contract.pk}.",
            link=f"/admin/disputes/{dispute.pk}",
        )
        return dispute

    def _locked_dispute(self, dispute_id):
        dispute = Dispute.objects.select_for_update().filter(pk=dispute_id).first()
        if dispute is None:
            raise NotFound("DISPUTE_NOT_FOUND")
        return dispute

    def admin_review_dispute(self, dispute_id):
        """`open -> under_review`."""
        require_admin(self.actor)
        return run_in_transaction(self._review, dispute_id)

    def _review(self, dispute_id):
        dispute = self._locked_dispute(dispute_id)
        if dispute.status != Dispute.STATUS_OPEN:
            raise FailedPrecondition("DISPUTE_NOT_OPEN")
        dispute.status = Dispute.STATUS_UNDER_REVIEW
        dispute.save(update_fields=["status", "updated_at"])
        return dispute

    def admin_resolve_dispute(self, dispute_id, outcome, refund_cents, notes, block_uid=None):
        """`under_review -> resolved` with an outcome; refunds go through the payment provider."""
        require_admin(self.actor)
        if outcome not in dict(Dispute.OUTCOMES):
            raise InvalidArgument("INVALID_OUTCOME")
        return run_in_transaction(self._resolve, dispute_id, outcome, int(refund_cents), notes, block_uid)

    def _resolve(self, dispute_id, outcome, refund, notes, block_uid):
        dispute = self._locked_dispute(dispute_id)
        if dispute.status != Dispute.STATUS_UNDER_REVIEW:
            raise FailedPrecondition("DISPUTE_NOT_UNDER_REVIEW")
        if dispute.contract_id is None:
            raise NotFound("CONTRACT_NOT_FOUND")
        contract = Contract.objects.select_for_update().filter(pk=dispute.contract_id).first()
        if contract is None:
            raise NotFound("CONTRACT_NOT_FOUND")

        total = contract.total_price_cents
        if outcome == Dispute.OUTCOME_NO_REFUND and refund != 0:
            raise InvalidArgument("REFUND_MUST_BE_ZERO")
        if outcome == Dispute.OUTCOME_REFUND and refund != total:
            raise InvalidArgument("REFUND_MUST_EQUAL_TOTAL")
        if outcome == Dispute.OUTCOME_PARTIAL_REFUND and not 0 < refund < total:
            raise InvalidArgument("REFUND_MUST_BE_PARTIAL")
        if refund > 0 and contract.payout_transfer_status == Contract.TRANSFER_SENT:
            raise FailedPrecondition("PAYOUT_ALREADY_SENT")
        if refund > 0 and contract.payment_status != Contract.PAYMENT_PAID:
            raise FailedPrecondition("CONTRACT_NOT_PAID")

        sanctioned = None
        if block_uid:
            sanctioned = get_user_by_uid(block_uid)
            if not dispute.is_party(sanctioned):
                raise InvalidArgument("BLOCK_TARGET_NOT_PARTY")

        if sanctioned is not None:
            other = dispute.creator if sanctioned.pk == dispute.artist_id else dispute.artist
            self.graph.block(other, sanctioned)

        if refund > 0:
            contract.payment_status = Contract.PAYMENT_REFUNDED if refund == total else Contract.PAYMENT_PARTIAL_REFUND
        if refund == total and total > 0:
            contract.status = Contract.STATUS_CANCELLED
        elif contract.status == Contract.STATUS_DISPUTED:
            contract.status = Contract.STATUS_ACTIVE
        contract.save(update_fields=["status", "payment_status", "updated_at"])

        dispute.status = Dispute.STATUS_RESOLVED
        dispute.outcome = outcome
        dispute.refund_cents = refund
        dispute.resolution_notes = notes
        dispute.resolved_by = self.actor
        dispute.resolved_at = timezone.now()
        dispute.save()

        body = f"Outcome: {outcome}. Refund: ${refund / 100:.2f}."
        for party in (dispute.artist, dispute.creator):
            self.notifications.notify(
                party,
                "dispute_resolved",
                sender=self.actor,
                title="Dispute resolved",
                body=body,
                link=f"/contracts/{contract.pk}",
            )
            send_email(party.email, "Dispute resolved", body)

        # last step of the attempt: a retried attempt repeats the call under the same key
        if refund > 0:
            self.provider.refund(contract, refund, idempotency_key=f"refund_{dispute.pk}")
        logger.info("Dispute %s resolved by %s: %s (%s cents)", dispute.pk, self.actor.username, outcome, refund)
        return dispute
