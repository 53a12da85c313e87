"""Public landing page content (single document)."""
from typing import Optional

from beanie import Document
from pydantic import BaseModel


class LandingConfig(Document):
    """Single-doc landing page config."""

    school_name: str = "Tiny Toddlers Playschool"
    hero_title: Optional[str] = "A Playful Start for a Bright Future"
    hero_subtitle: Optional[str] = None
    about_title: Optional[str] = "About Our School"
    about_text: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None

    class Settings:
        name = "landing_config"
        use_state_management = True


class LandingConfigUpdate(BaseModel):
    school_name: Optional[str] = None
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    about_title: Optional[str] = None
    about_text: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
