"""Profile repository: feed queries and the completeness invariant."""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy import select

from swipematch.db.models.profile import Profile
from swipematch.db.repository import BaseRepository

# Fields that must be non-blank for a profile to be complete
REQUIRED_FIELDS = (
    "display_name",
    "technical_expertise",
    "location_tz",
    "skills_background",
    "interests_building",
)

EDITABLE_FIELDS = REQUIRED_FIELDS + (
    "domain_expertise",
    "linkedin_url",
    "photo_path",
    "is_live",
    "is_admin",
)


def _is_present(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def is_profile_complete(fields: Dict[str, Any]) -> bool:
    """True when every required field is a non-blank string."""
    return all(_is_present(fields.get(name)) for name in REQUIRED_FIELDS)


def missing_fields(fields: Dict[str, Any]) -> List[str]:
    """Human-readable names of the required fields still missing."""
    return [
        name.replace("_", " ").title()
        for name in REQUIRED_FIELDS
        if not _is_present(fields.get(name))
    ]


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile model with feed queries."""

    async def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        return await self.get_by_id(user_id)

    async def get_many(self, user_ids: Iterable[str]) -> Dict[str, Profile]:
        """Fetch profiles for a set of ids, keyed by user id."""
        ids = list(set(user_ids))
        if not ids:
            return {}
        profiles = await self.filter(user_id__in=ids)
        return {p.user_id: p for p in profiles}

    async def save_profile(self, user_id: str, **fields: Any) -> Profile:
        """
        Create or update a profile.

        ``is_complete`` is recomputed from the merged fields on every write
        and ``is_live`` is forced off whenever the profile is incomplete.
        """
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")

        profile = await self.get_by_user_id(user_id)
        if profile is None:
            profile = Profile(user_id=user_id)
            self.session.add(profile)

        for name, value in fields.items():
            setattr(profile, name, value)

        merged = {name: getattr(profile, name) for name in REQUIRED_FIELDS}
        profile.is_complete = is_profile_complete(merged)
        if not profile.is_complete:
            profile.is_live = False
        profile.is_live = bool(profile.is_live)
        profile.is_admin = bool(profile.is_admin)
        profile.updated_at = datetime.now(timezone.utc)

        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def get_candidates(
        self,
        viewer_id: str,
        decided_clause,
        limit: int,
        require_photo: bool = True,
    ) -> List[Profile]:
        """
        Visible profiles the viewer has not decided on, newest first.

        Args:
            viewer_id: Viewer's user id (always excluded)
            decided_clause: Correlated EXISTS over the viewer's swipes,
                negated here as an anti-join
            limit: Maximum number of profiles to return
            require_photo: Exclude profiles without a photo path
        """
        query = select(self.model).where(
            self.model.is_live.is_(True),
            self.model.user_id != viewer_id,
            ~decided_clause,
        )
        if require_photo:
            query = query.where(
                self.model.photo_path.is_not(None),
                self.model.photo_path != "",
            )
        query = query.order_by(
            self.model.updated_at.desc(), self.model.user_id
        ).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
