"""Disclosure gate for private contact values."""

from __future__ import annotations

from typing import Iterable

import structlog

from swipematch.core.errors import InvalidInputError
from swipematch.db.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DisclosureGate:
    """
    Decides, per counterpart, whether a contact value may be revealed.

    A counterpart's number is disclosed only when all of these hold:
    the viewer has not opted out of sharing, a match exists for the pair,
    the counterpart shares, and the counterpart has a non-blank number.
    The result never says which condition failed.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve_contacts(
        self, viewer_id: str, counterpart_ids: Iterable[str]
    ) -> dict[str, str]:
        """
        Map each eligible counterpart id to its contact value.

        Match existence is checked against the store on every call.
        """
        if not viewer_id:
            raise InvalidInputError("viewer_id is required")

        viewer_contact = await self.uow.contacts.get_by_user_id(viewer_id)
        if viewer_contact is not None and not viewer_contact.share:
            # Opting out of sharing also opts out of receiving
            logger.info("disclosure.viewer_opted_out", viewer_id=viewer_id)
            return {}

        disclosed: dict[str, str] = {}
        for counterpart_id in dict.fromkeys(counterpart_ids):
            if not counterpart_id or counterpart_id == viewer_id:
                continue

            if not await self.uow.matches.exists_for_pair(viewer_id, counterpart_id):
                continue

            contact = await self.uow.contacts.get_by_user_id(counterpart_id)
            if contact is None or not contact.share:
                continue

            if contact.whatsapp:
                disclosed[counterpart_id] = contact.whatsapp

        logger.info(
            "disclosure.resolved",
            viewer_id=viewer_id,
            disclosed=len(disclosed),
        )
        return disclosed
