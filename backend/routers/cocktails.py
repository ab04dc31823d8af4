import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from schemas.cocktails import CocktailInput, MessageResponse
from db.database import get_async_session
from db.cocktail import Cocktail as CocktailModel, parse_cocktail_id
from core.exceptions import NotFoundError, StorageError
from typing import List, Dict

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_or_404(db: AsyncSession, cocktail_id: str) -> CocktailModel:
    key = parse_cocktail_id(cocktail_id)
    if key is None:
        raise NotFoundError("Cocktail not found")
    try:
        result = await db.execute(
            select(CocktailModel).where(CocktailModel.id == key)
        )
    except SQLAlchemyError as e:
        logger.exception("Lookup of cocktail %s failed", cocktail_id)
        raise StorageError(f"Error loading cocktail: {e}") from e
    cocktail = result.scalar_one_or_none()
    if not cocktail:
        raise NotFoundError("Cocktail not found")
    return cocktail


# Store operations, shared with the catalog page

async def list_cocktails(db: AsyncSession) -> List[CocktailModel]:
    try:
        result = await db.execute(
            select(CocktailModel).order_by(CocktailModel.created_at.desc())
        )
    except SQLAlchemyError as e:
        logger.exception("Listing cocktails failed")
        raise StorageError(f"Error loading cocktails: {e}") from e
    return list(result.scalars().all())


async def insert_cocktail(db: AsyncSession, cocktail: CocktailInput) -> CocktailModel:
    try:
        cocktail_model = CocktailModel(**cocktail.to_model_data())
        db.add(cocktail_model)
        await db.commit()
        await db.refresh(cocktail_model)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Creating cocktail %r failed", cocktail.theCock)
        raise StorageError(f"Error creating cocktail: {e}") from e

    logger.info("Created cocktail %s (%s)", cocktail_model.id, cocktail_model.name)
    return cocktail_model


async def replace_cocktail(db: AsyncSession, cocktail_id: str, cocktail: CocktailInput) -> None:
    cocktail_model = await _get_or_404(db, cocktail_id)

    try:
        for field, value in cocktail.to_model_data().items():
            setattr(cocktail_model, field, value)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Updating cocktail %s failed", cocktail_id)
        raise StorageError(f"Error updating cocktail: {e}") from e

    logger.info("Updated cocktail %s", cocktail_id)


async def remove_cocktail(db: AsyncSession, cocktail_id: str) -> None:
    cocktail_model = await _get_or_404(db, cocktail_id)

    try:
        await db.delete(cocktail_model)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Deleting cocktail %s failed", cocktail_id)
        raise StorageError(f"Error deleting cocktail: {e}") from e

    logger.info("Deleted cocktail %s", cocktail_id)


@router.get("", response_model=List[Dict])
async def get_cocktails(db: AsyncSession = Depends(get_async_session)):
    """Get all cocktails, newest first"""
    return [cocktail.to_schema for cocktail in await list_cocktails(db)]


@router.get("/{cocktail_id}", response_model=Dict)
async def get_cocktail(cocktail_id: str, db: AsyncSession = Depends(get_async_session)):
    """Get a single cocktail by ID"""
    cocktail = await _get_or_404(db, cocktail_id)
    return cocktail.to_schema


@router.post("", response_model=Dict)
async def create_cocktail(
    cocktail: CocktailInput,
    db: AsyncSession = Depends(get_async_session)
):
    """Create a new cocktail"""
    cocktail_model = await insert_cocktail(db, cocktail)
    return cocktail_model.to_schema


@router.put("/{cocktail_id}", response_model=MessageResponse)
async def update_cocktail(
    cocktail_id: str,
    cocktail: CocktailInput,
    db: AsyncSession = Depends(get_async_session)
):
    """Replace the editable fields of an existing cocktail"""
    await replace_cocktail(db, cocktail_id, cocktail)
    return {"message": "Cocktail updated successfully"}


@router.delete("/{cocktail_id}", response_model=MessageResponse)
async def delete_cocktail(
    cocktail_id: str,
    db: AsyncSession = Depends(get_async_session)
):
    """Delete a cocktail by ID"""
    await remove_cocktail(db, cocktail_id)
    return {"message": "Cocktail deleted successfully"}
