"""Seed database with sample profiles for development and testing."""

import asyncio
import sys

from swipematch.db.unit_of_work import UnitOfWork
from swipematch.testing.sample_profiles import generate_contact, generate_profiles


async def seed_database(batch: int = 1, count: int = 10, interactive: bool = True):
    """Seed ``count`` complete, live profiles (with contacts) for the given batch."""
    profiles = generate_profiles(batch, count)

    async with UnitOfWork() as uow:
        print("Seeding database with sample profiles...")

        existing_count = await uow.profiles.count()
        if existing_count > 0 and interactive:
            print(f"Database already contains {existing_count} profiles")
            response = input("Do you want to continue and add more data? (y/n): ")
            if response.lower() != "y":
                print("Seeding cancelled.")
                return

        created = 0
        updated = 0
        print(f"\nSeeding {len(profiles)} profiles (batch {batch})...")
        for profile_data in profiles:
            user_id = profile_data.pop("user_id")
            index = int(user_id.split("-")[1])
            try:
                existing = await uow.profiles.get_by_user_id(user_id)
                profile = await uow.profiles.save_profile(user_id, **profile_data)
                await uow.contacts.save_contact(**generate_contact(index))
                await uow.commit()
                if existing:
                    updated += 1
                    print(f"  - Updated {profile.user_id} ({profile.display_name})")
                else:
                    created += 1
                    print(f"  ✓ Created {profile.user_id} ({profile.display_name})")
            except Exception as e:
                print(f"  ✗ Error seeding {user_id}: {e}")
                await uow.rollback()

        await uow.commit()
        print("\n✅ Database seeding completed successfully!")

        print("\nDatabase summary:")
        print(f"  - Created: {created}")
        print(f"  - Updated: {updated}")
        print(f"  - Total profiles: {await uow.profiles.count()}")
        print(f"  - Live profiles: {await uow.profiles.count(is_live=True)}")


if __name__ == "__main__":
    batch = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    count = int(sys.argv[2]) if len(sys.argv) > 2 else 10
    asyncio.run(seed_database(batch, count))
