import logging
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .cocktail import Cocktail

logger = logging.getLogger(__name__)

INITIAL_COCKTAILS = [
    {
        "name": "Hot Rüuski",
        "ingredients": "Wodka, Peat Moss, Pine Tar",
        "recipe": "Take your ingredients, mix, serve",
        "image": None,
        "comment": "A couple of these, you'll forget all your problems!",
    },
    {
        "name": "Cold Soul",
        "ingredients": "Wodka, Ice, Herbs",
        "recipe": "Gather your ingredients, combine, shake, serve over ice",
        "image": None,
        "comment": "Have one or six of these, and discuss the future!",
    },
]


async def seed_initial_cocktails(session: AsyncSession) -> int:
    """Insert the sample cocktails into an empty store. Returns how many were added."""
    count = await session.scalar(select(func.count()).select_from(Cocktail))
    if count:
        return 0

    for data in INITIAL_COCKTAILS:
        session.add(Cocktail(**data))
    await session.commit()
    logger.info("Seeded %d initial cocktails", len(INITIAL_COCKTAILS))
    return len(INITIAL_COCKTAILS)
