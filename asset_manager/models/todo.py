"""
Todo model - quick asset-related follow-ups and reminders
"""
from sqlalchemy import Column, Integer, Text, Boolean, DateTime
from datetime import datetime
from asset_manager.database import Base


class TodoItem(Base):
    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)
    done = Column(Boolean, nullable=False, default=False)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
