"""
Create an admin account, or promote an existing user to admin.
Run with: python -m scripts.create_admin admin@hospital.org --password secret123
"""

import argparse
import asyncio
from sqlalchemy import select
from impacts.auth import hash_password
from impacts.database import engine, async_session
from impacts.models.user import User


async def create_admin(email: str, password: str | None, first_name: str, last_name: str):
    async with async_session() as session:
        user = await session.scalar(select(User).where(User.email == email))
        if user:
            user.role = "admin"
            if password:
                user.password_hash = hash_password(password)
            print(f"Promoted {email} to admin.")
        else:
            if not password:
                raise SystemExit("--password is required when creating a new admin")
            session.add(User(
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                role="admin",
            ))
            print(f"Created admin {email}.")
        await session.commit()
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote an IMPACTS admin user")
    parser.add_argument("email")
    parser.add_argument("--password", help="Required for new accounts; resets the password otherwise")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    args = parser.parse_args()

    asyncio.run(create_admin(args.email, args.password, args.first_name, args.last_name))
