import uuid

from sqlalchemy import Boolean, Column, Integer, Numeric, String, Text

from .base import BaseModel


class Option(BaseModel):
    """A selectable reservation type/add-on (e.g. kitchen, main hall)."""

    __tablename__ = "options"

    id          = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name        = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price       = Column(Numeric(10, 2), nullable=False, default=0)
    active      = Column(Boolean, nullable=False, default=True, index=True)
    sort_order  = Column(Integer, nullable=False, default=0)
