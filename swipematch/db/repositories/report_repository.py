"""Report repository with moderation queries."""

from typing import List, Optional
from sqlalchemy import select, desc

from swipematch.db.models.report import Report
from swipematch.db.repository import BaseRepository


class ReportRepository(BaseRepository[Report]):
    """Repository for Report model."""

    async def create_report(
        self,
        reporter_id: str,
        reported_id: str,
        reason: Optional[str] = None,
        details: Optional[str] = None,
    ) -> Report:
        """Create a new report in the ``open`` state."""
        return await self.create(
            reporter_id=reporter_id,
            reported_id=reported_id,
            reason=reason,
            details=details,
            status="open",
        )

    async def get_recent(
        self, status: Optional[str] = None, limit: Optional[int] = None
    ) -> List[Report]:
        """
        Get reports newest first.

        Args:
            status: Only return reports in this status
            limit: Maximum number to return
        """
        query = select(self.model).order_by(desc(self.model.created_at), desc(self.model.id))
        if status:
            query = query.where(self.model.status == status)
        if limit:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update_status(self, report_id: int, status: str) -> Optional[Report]:
        """Move a report to a new status. Returns None if it does not exist."""
        report = await self.get_by_id(report_id)
        if report is None:
            return None
        report.status = status
        await self.session.flush()
        await self.session.refresh(report)
        return report
