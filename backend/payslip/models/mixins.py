from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String


class TraceableMixin:
    """Who touched a row, when, and from which address."""

    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
    created_by_id = Column(Integer, nullable=True)
    updated_by_id = Column(Integer, nullable=True)
    request_ip = Column(String(64), nullable=True)
