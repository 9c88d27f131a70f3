"""
Asset model - equipment and subscription inventory records
"""
from sqlalchemy import Column, Integer, String, Text, Float, Date, Boolean, ForeignKey
from asset_manager.database import Base


class Asset(Base):
    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, index=True)
    asset_code = Column(String, nullable=False)
    asset_name = Column(String, nullable=False, index=True)
    model = Column(String, nullable=True)
    fa_ledger = Column(String, nullable=True)
    date_of_purchase = Column(Date, nullable=True)
    cost_of_asset = Column(Float, nullable=True)
    useful_life = Column(String, nullable=True)
    number_marked = Column(String, nullable=True)
    quantity = Column(Integer, nullable=True)
    assigned_to = Column(String, nullable=True)
    location = Column(String, nullable=True)
    closing_stock_rs = Column(Float, nullable=True)
    status = Column(String, nullable=False)  # "In Use" / "In Storage" / "For Repair", free text tolerated
    remarks = Column(Text, nullable=True)

    # Cleared by the database when the category row goes away
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Subscription tracking (SaaS, licenses)
    is_subscription = Column(Boolean, nullable=False, default=False)
    subscription_vendor = Column(String, nullable=True)
    subscription_renewal_date = Column(Date, nullable=True)
    subscription_billing_cycle = Column(String, nullable=True)
    subscription_url = Column(String, nullable=True)
