"""Audit log repository."""

import json
from typing import Any, Dict, List, Optional
from sqlalchemy import select, desc

from swipematch.db.models.log import Log
from swipematch.db.repository import BaseRepository


class LogRepository(BaseRepository[Log]):
    """Repository for Log model with audit queries."""

    async def create_log(
        self,
        level: str,
        event: str,
        message: str,
        component: Optional[str] = None,
        request_id: Optional[str] = None,
        actor_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        match_id: Optional[int] = None,
        report_id: Optional[int] = None,
    ) -> Log:
        """
        Create a new audit log entry.

        Args:
            level: Log level (INFO, WARNING, ERROR)
            event: Event type
            message: Log message
            component: Component name
            request_id: Request ID for tracing
            actor_id: User who performed the action
            details: Extra context, stored as JSON
            match_id: Related match ID
            report_id: Related report ID

        Returns:
            Created log instance
        """
        return await self.create(
            level=level,
            event=event,
            message=message,
            component=component,
            request_id=request_id,
            actor_id=actor_id,
            details=json.dumps(details, default=str) if details else None,
            match_id=match_id,
            report_id=report_id,
        )

    async def get_by_event(self, event: str, limit: Optional[int] = None) -> List[Log]:
        """Get logs for an event type, newest first."""
        query = (
            select(self.model)
            .where(self.model.event == event)
            .order_by(desc(self.model.timestamp), desc(self.model.id))
        )
        if limit:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
