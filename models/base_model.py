#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixin for the store API.

- Integer surrogate primary key generated by the database
- created_at / updated_at timestamps set by the database (func.now())
- kwargs constructor that never lets callers set the generated columns

Notes:
- For SQLite, func.now() maps to CURRENT_TIMESTAMP.
- eager_defaults fetches the server-generated timestamps right after the flush,
  so serialized records always carry them.
"""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Declarative base for all models
Base = declarative_base()

GENERATED_COLUMNS = frozenset({"id", "created_at", "updated_at"})


class BaseModel:
    """
    Base mixin for all persistent models.

    Put it BEFORE Base in the class list so its __init__ wins over the
    declarative default constructor.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __mapper_args__ = {"eager_defaults": True}

    def __init__(self, *args, **kwargs):
        for key, value in kwargs.items():
            if key != "__class__" and key not in GENERATED_COLUMNS:
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"

    def __str__(self) -> str:
        """Human-friendly representation including id and loaded fields."""
        fields = {k: v for k, v in self.__dict__.items() if k != "_sa_instance_state"}
        return f"[{self.__class__.__name__}] ({self.id}) {fields}"
