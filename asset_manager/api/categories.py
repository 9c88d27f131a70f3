"""
Category API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from typing import List, Optional
from pydantic import BaseModel

from asset_manager.database import get_db
from asset_manager.models.category import Category

router = APIRouter()


class CategorySummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class CategoryResponse(CategorySummary):
    description: Optional[str]


class CategoryCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


@router.get("", response_model=List[CategorySummary])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """List categories by name (descriptions are left out)"""
    result = await db.execute(
        select(Category.id, Category.name).order_by(Category.name)
    )
    return [CategorySummary(**row) for row in result.mappings().all()]


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(data: CategoryCreate, db: AsyncSession = Depends(get_db)):
    """Create a category"""
    if not data.name or not data.name.strip():
        raise HTTPException(status_code=400, detail="Category name is required")

    category = Category(name=data.name.strip(), description=data.description or None)
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


@router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a category; the assets.category_id foreign key sets dependents to NULL"""
    result = await db.execute(delete(Category).where(Category.id == category_id))
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="Category not found")
    await db.commit()
    return Response(status_code=204)
