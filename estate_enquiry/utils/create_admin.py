"""
Create the back-office admin user on server startup.
Checks if the admin exists, creates it if not.
"""
import os
import asyncio
from sqlalchemy import select
from dotenv import load_dotenv

from estate_enquiry.database import AsyncSessionLocal
from estate_enquiry.models.database import User
from estate_enquiry.utils.auth import hash_password
from estate_enquiry.config.logging import get_logger

load_dotenv()

logger = get_logger(__name__)

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
ADMIN_FULL_NAME = os.getenv("ADMIN_FULL_NAME", "Site Admin")


async def create_admin_user(session_factory=AsyncSessionLocal) -> bool:
    """Create the admin user if it doesn't exist. Returns True when one was created."""
    try:
        async with session_factory() as db:
            result = await db.execute(
                select(User).where(User.email == ADMIN_EMAIL)
            )
            if result.scalar_one_or_none():
                logger.info("Admin user already exists")
                return False

            db.add(User(
                email=ADMIN_EMAIL,
                hashed_password=hash_password(ADMIN_PASSWORD),
                full_name=ADMIN_FULL_NAME,
                role="admin",
            ))
            await db.commit()

            logger.warning("Admin user created; change the default password after first login")
            return True

    except Exception:
        logger.error("Error creating admin user", exc_info=True)
        raise


def run_create_admin():
    """Synchronous wrapper to run the async function"""
    asyncio.run(create_admin_user())


if __name__ == "__main__":
    run_create_admin()
