"""Moderation interlock: reports sever matches with the reporter."""

from __future__ import annotations

import structlog

from swipematch.core.errors import InvalidInputError, NotFoundError
from swipematch.db.unit_of_work import UnitOfWork
from swipematch.matching.metrics import MatchingMetrics, get_metrics
from swipematch.moderation.models import ReportStatus, ReportView

logger = structlog.get_logger(__name__)

MAX_REASON_LENGTH = 255


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ModerationInterlock:
    """Files reports and applies their side effect on match state."""

    def __init__(self, uow: UnitOfWork, metrics: MatchingMetrics | None = None):
        self.uow = uow
        self.metrics = metrics or get_metrics()

    async def file_report(
        self,
        reporter_id: str,
        reported_id: str,
        reason: str | None = None,
        details: str | None = None,
    ) -> ReportView:
        """
        Persist a report, then best-effort remove any match between the two.

        The report is committed before the unmatch is attempted. An unmatch
        failure is logged and rolled back; it never fails the report.

        Raises:
            InvalidInputError: blank ids, self-report or oversized reason
        """
        if not reporter_id or not reported_id:
            raise InvalidInputError("reported_user_id is required")
        if reporter_id == reported_id:
            raise InvalidInputError("Cannot report yourself")

        reason = _clean(reason)
        if reason and len(reason) > MAX_REASON_LENGTH:
            raise InvalidInputError(f"reason must be at most {MAX_REASON_LENGTH} characters")

        report = await self.uow.reports.create_report(
            reporter_id=reporter_id,
            reported_id=reported_id,
            reason=reason,
            details=_clean(details),
        )
        await self.uow.commit()
        view = ReportView.model_validate(report)
        logger.info(
            "report.filed",
            report_id=view.id,
            reporter_id=reporter_id,
            reported_id=reported_id,
        )

        unmatched = await self._sever_match(view.id, reporter_id, reported_id)
        self.metrics.record_report(unmatched=bool(unmatched), failed=unmatched is None)
        return view

    async def _sever_match(
        self, report_id: int, reporter_id: str, reported_id: str
    ) -> bool | None:
        """Delete the pair's match. Returns None when the attempt failed."""
        try:
            deleted = await self.uow.matches.delete_pair(reporter_id, reported_id)
            await self.uow.commit()
        except Exception as e:
            logger.error(
                "report.unmatch_failed",
                report_id=report_id,
                reporter_id=reporter_id,
                reported_id=reported_id,
                error=str(e),
                exc_info=True,
            )
            try:
                await self.uow.rollback()
            except Exception as rollback_error:
                logger.error(
                    "report.unmatch_rollback_failed",
                    report_id=report_id,
                    error=str(rollback_error),
                )
            return None

        if deleted:
            logger.info(
                "report.auto_unmatched",
                report_id=report_id,
                reporter_id=reporter_id,
                reported_id=reported_id,
            )
        return deleted

    async def list_reports(
        self, status: ReportStatus | str | None = None, limit: int | None = None
    ) -> list[ReportView]:
        """Reports newest first, optionally filtered by status."""
        parsed = ReportStatus.parse(status).value if status else None
        reports = await self.uow.reports.get_recent(status=parsed, limit=limit)
        return [ReportView.model_validate(r) for r in reports]

    async def update_report_status(
        self,
        report_id: int,
        status: ReportStatus | str,
        actor_id: str | None = None,
        request_id: str | None = None,
    ) -> ReportView:
        """
        Move a report through its lifecycle and audit the change.

        Raises:
            InvalidInputError: unknown status
            NotFoundError: no report with this id
        """
        parsed = ReportStatus.parse(status)
        report = await self.uow.reports.update_status(report_id, parsed.value)
        if report is None:
            raise NotFoundError(f"Report {report_id} not found")

        await self.uow.logs.create_log(
            level="INFO",
            event="report.status_changed",
            message=f"Report {report_id} moved to {parsed.value}",
            component="moderation",
            request_id=request_id,
            actor_id=actor_id,
            report_id=report_id,
            details={"status": parsed.value},
        )
        await self.uow.commit()

        logger.info(
            "report.status_changed",
            report_id=report_id,
            status=parsed.value,
            actor_id=actor_id,
        )
        return ReportView.model_validate(report)
