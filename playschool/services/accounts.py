"""Account lookups shared by login, user management and enrollment."""
import re

from playschool.models.user import User


async def find_user_by_email(email: str):
    """Case-insensitive exact match on the stored email."""
    pattern = f"^{re.escape(email.strip())}$"
    return await User.find_one({"email": {"$regex": pattern, "$options": "i"}})
