"""Tests for database models and repositories."""

import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.schema import CreateTable

from swipematch.core.errors import InvalidInputError
from swipematch.db.models import Match
from swipematch.db.repositories import canonical_pair
from swipematch.db.repositories.profile_repository import is_profile_complete, missing_fields
from swipematch.db.unit_of_work import UnitOfWork


class TestCanonicalPair:
    """Test the canonical (low, high) ordering of user pairs."""

    def test_orders_ids(self):
        assert canonical_pair("u2", "u1") == ("u1", "u2")
        assert canonical_pair("u1", "u2") == ("u1", "u2")

    def test_orders_by_code_point(self):
        assert canonical_pair("a", "B") == ("B", "a")
        assert canonical_pair("user_9", "User_10") == ("User_10", "user_9")

    def test_rejects_same_user(self):
        with pytest.raises(InvalidInputError):
            canonical_pair("u1", "u1")

    def test_rejects_blank_ids(self):
        with pytest.raises(InvalidInputError):
            canonical_pair("", "u1")
        with pytest.raises(InvalidInputError):
            canonical_pair("u1", None)  # type: ignore[arg-type]


class TestMatchSchema:
    """Test the DDL emitted for the matches table."""

    def test_postgres_pair_columns_use_byte_order_collation(self):
        ddl = str(CreateTable(Match.__table__).compile(dialect=postgresql.dialect()))
        assert ddl.count('COLLATE "C"') == 2

    def test_sqlite_pair_columns_have_no_collation(self):
        ddl = str(CreateTable(Match.__table__).compile(dialect=sqlite.dialect()))
        assert "COLLATE" not in ddl


class TestProfileCompleteness:
    """Test required-field detection."""

    def test_complete_profile(self):
        fields = {
            "display_name": "Ada",
            "technical_expertise": "Python",
            "location_tz": "London, GMT",
            "skills_background": "Compilers",
            "interests_building": "Developer tools",
        }
        assert is_profile_complete(fields)
        assert missing_fields(fields) == []

    def test_blank_fields_are_missing(self):
        fields = {"display_name": "Ada", "technical_expertise": "   "}
        assert not is_profile_complete(fields)
        assert "Technical Expertise" in missing_fields(fields)
        assert "Location Tz" in missing_fields(fields)


@pytest.mark.asyncio
@pytest.mark.usefixtures("test_db")
class TestProfileRepository:
    """Test Profile model and repository."""

    async def test_incomplete_profile_cannot_go_live(self):
        """Saving an incomplete profile forces is_live off."""
        async with UnitOfWork() as uow:
            profile = await uow.profiles.save_profile(
                "u1", display_name="Ada", is_live=True
            )
            await uow.commit()

            assert profile.is_complete is False
            assert profile.is_live is False

    async def test_becoming_incomplete_hides_profile(self, make_profile):
        await make_profile("u1")

        async with UnitOfWork() as uow:
            profile = await uow.profiles.save_profile("u1", skills_background="")
            await uow.commit()

            assert profile.is_complete is False
            assert profile.is_live is False

    async def test_complete_profile_goes_live(self, make_profile):
        profile = await make_profile("u1")
        assert profile.is_complete is True
        assert profile.is_live is True

    async def test_unknown_field_rejected(self):
        async with UnitOfWork() as uow:
            with pytest.raises(ValueError):
                await uow.profiles.save_profile("u1", favourite_colour="blue")

    async def test_get_many(self, make_profile):
        await make_profile("u1")
        await make_profile("u2", index=2)

        async with UnitOfWork() as uow:
            profiles = await uow.profiles.get_many(["u1", "u2", "missing"])
            assert set(profiles) == {"u1", "u2"}
            assert await uow.profiles.get_many([]) == {}


@pytest.mark.asyncio
@pytest.mark.usefixtures("test_db")
class TestSwipeRepository:
    """Test Swipe model and repository."""

    async def test_upsert_overwrites_direction(self):
        """A later decision replaces the earlier one for the same pair."""
        async with UnitOfWork() as uow:
            await uow.swipes.upsert_decision("u1", "u2", "like")
            await uow.commit()
            await uow.swipes.upsert_decision("u1", "u2", "pass")
            await uow.commit()

        async with UnitOfWork() as uow:
            swipe = await uow.swipes.get_decision("u1", "u2")
            assert swipe is not None
            assert swipe.direction == "pass"
            assert await uow.swipes.count(actor_id="u1", target_id="u2") == 1
            assert await uow.swipes.has_liked("u1", "u2") is False

    async def test_has_liked_is_directional(self):
        async with UnitOfWork() as uow:
            await uow.swipes.upsert_decision("u1", "u2", "like")
            await uow.commit()

            assert await uow.swipes.has_liked("u1", "u2") is True
            assert await uow.swipes.has_liked("u2", "u1") is False

    async def test_clear_pair_removes_both_directions(self):
        async with UnitOfWork() as uow:
            await uow.swipes.upsert_decision("u1", "u2", "like")
            await uow.swipes.upsert_decision("u2", "u1", "like")
            await uow.swipes.upsert_decision("u1", "u3", "like")
            await uow.commit()

            assert await uow.swipes.clear_pair("u2", "u1") == 2
            await uow.commit()

            assert await uow.swipes.count() == 1

    async def test_invalid_direction_rejected_by_store(self):
        async with UnitOfWork() as uow:
            with pytest.raises(IntegrityError):
                await uow.swipes.upsert_decision("u1", "u2", "maybe")
            await uow.rollback()


@pytest.mark.asyncio
@pytest.mark.usefixtures("test_db")
class TestMatchRepository:
    """Test Match model and repository."""

    async def test_upsert_pair_reports_creation_once(self):
        """Only the first upsert for a pair reports that it created the row."""
        async with UnitOfWork() as uow:
            assert await uow.matches.upsert_pair("u2", "u1") is True
            await uow.commit()
            assert await uow.matches.upsert_pair("u1", "u2") is False
            await uow.commit()

            assert await uow.matches.count() == 1
            match = await uow.matches.get_for_pair("u2", "u1")
            assert match is not None
            assert (match.user_low_id, match.user_high_id) == ("u1", "u2")

    async def test_exists_for_pair_either_order(self):
        async with UnitOfWork() as uow:
            await uow.matches.upsert_pair("u1", "u2")
            await uow.commit()

            assert await uow.matches.exists_for_pair("u1", "u2") is True
            assert await uow.matches.exists_for_pair("u2", "u1") is True
            assert await uow.matches.exists_for_pair("u1", "u3") is False

    async def test_delete_pair(self):
        async with UnitOfWork() as uow:
            await uow.matches.upsert_pair("u1", "u2")
            await uow.commit()

            assert await uow.matches.delete_pair("u2", "u1") is True
            assert await uow.matches.delete_pair("u2", "u1") is False
            await uow.commit()

            assert await uow.matches.exists_for_pair("u1", "u2") is False

    async def test_store_rejects_unordered_pair(self):
        """The ordering check holds even for writes that bypass canonical_pair."""
        async with UnitOfWork() as uow:
            with pytest.raises(IntegrityError):
                await uow.matches.create(user_low_id="u2", user_high_id="u1")
            await uow.rollback()

    async def test_mixed_case_pair(self):
        async with UnitOfWork() as uow:
            assert await uow.matches.upsert_pair("a", "B") is True
            await uow.commit()

            assert await uow.matches.exists_for_pair("B", "a") is True
            match = await uow.matches.get_for_pair("a", "B")
            assert (match.user_low_id, match.user_high_id) == ("B", "a")

    async def test_list_for_user_newest_first(self):
        now = datetime.now(timezone.utc)
        async with UnitOfWork() as uow:
            await uow.matches.create(
                user_low_id="u1", user_high_id="u2", created_at=now - timedelta(hours=2)
            )
            await uow.matches.create(
                user_low_id="u0", user_high_id="u1", created_at=now - timedelta(hours=1)
            )
            await uow.matches.create(user_low_id="u2", user_high_id="u3", created_at=now)
            await uow.commit()

            matches = await uow.matches.list_for_user("u1")
            assert [m.counterpart_of("u1") for m in matches] == ["u0", "u2"]

    async def test_counterpart_of(self):
        match = Match(user_low_id="a", user_high_id="b")
        assert match.counterpart_of("a") == "b"
        assert match.counterpart_of("b") == "a"


@pytest.mark.asyncio
@pytest.mark.usefixtures("test_db")
class TestBaseRepository:
    """Test generic repository behaviour through concrete repositories."""

    async def test_filter_operators(self):
        async with UnitOfWork() as uow:
            await uow.reports.create_report("u1", "u2")
            await uow.reports.create_report("u1", "u3")
            await uow.reports.create_report("u4", "u2")
            await uow.commit()

            assert len(await uow.reports.filter(reporter_id="u1")) == 2
            assert len(await uow.reports.filter(reported_id__in=["u2"])) == 2
            assert len(await uow.reports.filter(reporter_id__ne="u1")) == 1

    async def test_unknown_operator_rejected(self):
        async with UnitOfWork() as uow:
            with pytest.raises(ValueError):
                await uow.reports.filter(reporter_id__like="u%")

    async def test_delete_all_requires_filters(self):
        async with UnitOfWork() as uow:
            with pytest.raises(ValueError):
                await uow.matches.delete_all()

    async def test_update_and_exists(self):
        async with UnitOfWork() as uow:
            report = await uow.reports.create_report("u1", "u2", reason="spam")
            await uow.commit()

            updated = await uow.reports.update(report.id, details="repeated links")
            assert updated is not None
            assert updated.details == "repeated links"
            assert await uow.reports.exists(reason="spam") is True
            assert await uow.reports.exists(reason="other") is False


@pytest.mark.asyncio
@pytest.mark.usefixtures("test_db")
class TestContactRepository:
    """Test Contact model and repository."""

    async def test_number_stored_trimmed(self):
        async with UnitOfWork() as uow:
            await uow.contacts.save_contact("u1", whatsapp="  +15551112222 ")
            await uow.commit()

        async with UnitOfWork() as uow:
            contact = await uow.contacts.get_by_user_id("u1")
            assert contact.whatsapp == "+15551112222"

    async def test_blank_number_clears_value(self):
        async with UnitOfWork() as uow:
            await uow.contacts.save_contact("u1", whatsapp="+15551112222")
            await uow.commit()
            await uow.contacts.save_contact("u1", whatsapp="   ")
            await uow.commit()

        async with UnitOfWork() as uow:
            contact = await uow.contacts.get_by_user_id("u1")
            assert contact.whatsapp is None

    async def test_none_leaves_fields_unchanged(self):
        async with UnitOfWork() as uow:
            await uow.contacts.save_contact("u1", whatsapp="+15551112222", share=False)
            await uow.commit()
            await uow.contacts.save_contact("u1", verified=True)
            await uow.commit()

        async with UnitOfWork() as uow:
            contact = await uow.contacts.get_by_user_id("u1")
            assert contact.whatsapp == "+15551112222"
            assert contact.share is False
            assert contact.verified is True


@pytest.mark.asyncio
@pytest.mark.usefixtures("test_db")
class TestLogRepository:
    """Test audit log repository."""

    async def test_create_and_query_by_event(self):
        async with UnitOfWork() as uow:
            await uow.logs.create_log(
                level="INFO",
                event="admin.force_match",
                message="forced",
                actor_id="admin",
                details={"target_user_id": "u2"},
            )
            await uow.logs.create_log(level="INFO", event="admin.unmatch", message="removed")
            await uow.commit()

            logs = await uow.logs.get_by_event("admin.force_match")
            assert len(logs) == 1
            assert logs[0].actor_id == "admin"
            assert '"target_user_id": "u2"' in logs[0].details
