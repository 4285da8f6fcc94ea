"""Contact repository."""

from typing import Optional

from swipematch.db.models.contact import Contact
from swipematch.db.repository import BaseRepository


class ContactRepository(BaseRepository[Contact]):
    """Repository for Contact rows (one per user)."""

    async def get_by_user_id(self, user_id: str) -> Optional[Contact]:
        return await self.get_by_id(user_id)

    async def save_contact(
        self,
        user_id: str,
        whatsapp: Optional[str] = None,
        share: Optional[bool] = None,
        verified: Optional[bool] = None,
    ) -> Contact:
        """Create or update a contact; arguments left as None are unchanged."""
        contact = await self.get_by_user_id(user_id)
        if contact is None:
            contact = Contact(user_id=user_id, share=True, verified=False)
            self.session.add(contact)

        if whatsapp is not None:
            # Stored trimmed; a blank value clears the number
            contact.whatsapp = whatsapp.strip() or None
        if share is not None:
            contact.share = share
        if verified is not None:
            contact.verified = verified

        await self.session.flush()
        await self.session.refresh(contact)
        return contact
