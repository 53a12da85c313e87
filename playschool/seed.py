"""Seed the default admin user, batches and landing config if not present."""
import logging

from playschool.api.deps import get_password_hash
from playschool.models.batch import Batch
from playschool.models.landing import LandingConfig
from playschool.models.user import User, UserRole

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@tinytoddlers.com"
ADMIN_PASSWORD = "Admin@123"
ADMIN_NAME = "School Admin"

# name -> (annual fee, age group)
DEFAULT_BATCHES = {
    "Playgroup": (15000, "1.5 - 2.5 years"),
    "LKG": (18000, "2.5 - 3.5 years"),
    "UKG": (20000, "3.5 - 4.5 years"),
}


async def seed_admin():
    existing = await User.find_one(User.email == ADMIN_EMAIL)
    if existing:
        return
    await User(
        email=ADMIN_EMAIL,
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        name=ADMIN_NAME,
    ).insert()
    logger.info(f"Seeded admin user {ADMIN_EMAIL}")


async def seed_batches():
    for name, (fee_amount, age_group) in DEFAULT_BATCHES.items():
        if await Batch.find_one(Batch.name == name):
            continue
        await Batch(name=name, fee_amount=fee_amount, age_group=age_group).insert()
        logger.info(f"Seeded batch {name} ({fee_amount}/year)")


async def seed_landing():
    if not await LandingConfig.find_one():
        await LandingConfig().insert()
