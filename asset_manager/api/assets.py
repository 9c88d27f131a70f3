"""
Asset API endpoints - inventory records with their derived category name
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from typing import List, Optional
from datetime import date
from pydantic import BaseModel, field_validator

from asset_manager.database import get_db
from asset_manager.models.asset import Asset
from asset_manager.models.category import Category
from asset_manager.utils.validators import blank_to_none

router = APIRouter()


# --- Pydantic Schemas ---

class AssetResponse(BaseModel):
    id: int
    asset_code: str
    asset_name: str
    model: Optional[str]
    fa_ledger: Optional[str]
    date_of_purchase: Optional[date]
    cost_of_asset: Optional[float]
    useful_life: Optional[str]
    number_marked: Optional[str]
    quantity: Optional[int]
    assigned_to: Optional[str]
    location: Optional[str]
    closing_stock_rs: Optional[float]
    status: str
    remarks: Optional[str]
    category_id: Optional[int]
    category: Optional[str]
    is_subscription: bool = False
    subscription_vendor: Optional[str]
    subscription_renewal_date: Optional[date]
    subscription_billing_cycle: Optional[str]
    subscription_url: Optional[str]

    class Config:
        from_attributes = True


class AssetWrite(BaseModel):
    """Full asset body for create and replace"""
    asset_code: str
    asset_name: str
    status: str
    model: Optional[str] = None
    fa_ledger: Optional[str] = None
    date_of_purchase: Optional[date] = None
    cost_of_asset: Optional[float] = None
    useful_life: Optional[str] = None
    number_marked: Optional[str] = None
    quantity: Optional[int] = None
    assigned_to: Optional[str] = None
    location: Optional[str] = None
    closing_stock_rs: Optional[float] = None
    remarks: Optional[str] = None
    category_id: Optional[int] = None
    is_subscription: Optional[bool] = False
    subscription_vendor: Optional[str] = None
    subscription_renewal_date: Optional[date] = None
    subscription_billing_cycle: Optional[str] = None
    subscription_url: Optional[str] = None

    @field_validator(
        "model", "fa_ledger", "date_of_purchase", "useful_life", "number_marked",
        "assigned_to", "location", "remarks", "subscription_vendor",
        "subscription_renewal_date", "subscription_billing_cycle", "subscription_url",
        mode="before",
    )
    @classmethod
    def _empty_as_null(cls, value):
        return blank_to_none(value)

    @field_validator("is_subscription", mode="after")
    @classmethod
    def _default_not_subscription(cls, value):
        return bool(value)

    def to_row(self) -> dict:
        return self.model_dump()


# --- Helpers ---

# Listed one by one so a column added to the table never leaks into responses
ASSET_COLUMNS = (
    Asset.id,
    Asset.asset_code,
    Asset.asset_name,
    Asset.model,
    Asset.fa_ledger,
    Asset.date_of_purchase,
    Asset.cost_of_asset,
    Asset.useful_life,
    Asset.number_marked,
    Asset.quantity,
    Asset.assigned_to,
    Asset.location,
    Asset.closing_stock_rs,
    Asset.status,
    Asset.remarks,
    Asset.category_id,
    Asset.is_subscription,
    Asset.subscription_vendor,
    Asset.subscription_renewal_date,
    Asset.subscription_billing_cycle,
    Asset.subscription_url,
)


def _asset_query():
    return (
        select(*ASSET_COLUMNS, Category.name.label("category"))
        .select_from(Asset)
        .outerjoin(Category, Asset.category_id == Category.id)
    )


async def _load_asset(db: AsyncSession, asset_id: int) -> Optional[AssetResponse]:
    result = await db.execute(_asset_query().where(Asset.id == asset_id))
    row = result.mappings().one_or_none()
    if row is None:
        return None
    return AssetResponse(**row)


# --- Endpoints ---

@router.get("", response_model=List[AssetResponse])
async def list_assets(db: AsyncSession = Depends(get_db)):
    """List all assets with their category name, ordered by asset name"""
    result = await db.execute(_asset_query().order_by(Asset.asset_name))
    return [AssetResponse(**row) for row in result.mappings().all()]


@router.get("/{asset_id}", response_model=AssetResponse)
async def get_asset(asset_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single asset"""
    asset = await _load_asset(db, asset_id)
    if asset is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return asset


@router.post("", response_model=AssetResponse, status_code=201)
async def create_asset(data: AssetWrite, db: AsyncSession = Depends(get_db)):
    """Create a new asset"""
    asset = Asset(**data.to_row())
    db.add(asset)
    await db.commit()
    return await _load_asset(db, asset.id)


@router.put("/{asset_id}", response_model=AssetResponse)
async def update_asset(asset_id: int, data: AssetWrite, db: AsyncSession = Depends(get_db)):
    """Replace every field of an asset"""
    result = await db.execute(select(Asset).where(Asset.id == asset_id))
    asset = result.scalar_one_or_none()
    if not asset:
        raise HTTPException(status_code=404, detail="Asset not found")

    for key, value in data.to_row().items():
        setattr(asset, key, value)

    await db.commit()
    return await _load_asset(db, asset_id)


@router.delete("/{asset_id}", status_code=204)
async def delete_asset(asset_id: int, db: AsyncSession = Depends(get_db)):
    """Delete an asset"""
    result = await db.execute(delete(Asset).where(Asset.id == asset_id))
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="Asset not found")
    await db.commit()
    return Response(status_code=204)
