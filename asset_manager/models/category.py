"""
Category model - named groupings that assets optionally belong to
"""
from sqlalchemy import Column, Integer, String, Text
from asset_manager.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(Text, nullable=True)
