"""Create tables (if missing) and an admin user, or promote an existing one.

Usage:
    python -m scripts.seed_admin <email> [password] [name]
If password is omitted for a new user, a random one is printed.
"""

import asyncio
import secrets
import sys

from storefront.domain.enums import UserRole
from storefront.infrastructure.persistence import database, models  # noqa: F401
from storefront.infrastructure.persistence.database import Base, dispose_engine, get_session_factory
from storefront.infrastructure.persistence.repositories import UserRepository


async def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.seed_admin <email> [password] [name]", file=sys.stderr)
        sys.exit(1)
    email = sys.argv[1].strip().lower()
    password = sys.argv[2] if len(sys.argv) > 2 else None
    name = sys.argv[3] if len(sys.argv) > 3 else "Admin"

    session_factory = get_session_factory()
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        async with session_factory() as session:
            async with session.begin():
                repo = UserRepository(session)
                user = await repo.get_by_email(email)
                if user is not None:
                    await repo.update_by_key(user.id, {"role": UserRole.ADMIN.value})
                    if password:
                        await repo.set_password(user.id, password)
                    print(f"Promoted {email} ({user.id}) to admin")
                    return
                generated = password is None
                password = password or secrets.token_urlsafe(12)
                user = await repo.create_user(
                    email, password, name=name, role=UserRole.ADMIN.value
                )
                print(f"Created admin {email} ({user.id})")
                if generated:
                    print(f"Password: {password}")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
