"""Public landing page content."""
from fastapi import APIRouter

from playschool.api.deps import AdminOnly
from playschool.models.landing import LandingConfig, LandingConfigUpdate

router = APIRouter()
public_router = APIRouter()


async def get_or_create_landing() -> LandingConfig:
    config = await LandingConfig.find_one()
    if not config:
        config = LandingConfig()
        await config.insert()
    return config


def _landing_out(config: LandingConfig) -> dict:
    return {"id": str(config.id), **config.model_dump(exclude={"id", "revision_id"})}


@public_router.get("/")
async def get_landing_config():
    return _landing_out(await get_or_create_landing())


@router.put("/")
async def update_landing_config(data: LandingConfigUpdate, admin: AdminOnly):
    config = await get_or_create_landing()
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(config, key, value)
    await config.save()
    return _landing_out(config)
