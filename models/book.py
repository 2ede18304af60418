from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)

from models.base_model import BaseModel, Base

DEFAULT_LANGUAGE = "Español"


class Book(BaseModel, Base):
    __tablename__ = "books"

    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    # Optional, but unique among the rows that carry one
    isbn = Column(String(20), nullable=True, unique=True)
    publisher = Column(String(255), nullable=True)
    publication_year = Column(Integer, nullable=True)  # bounded in schema (moves with the calendar)
    genre = Column(String(100), nullable=True)
    language = Column(String(50), nullable=False, default=DEFAULT_LANGUAGE)
    pages = Column(Integer, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    in_stock = Column(Boolean, nullable=False, default=True)
    rating = Column(Numeric(3, 2), nullable=True)

    __table_args__ = (
        CheckConstraint("(pages IS NULL) OR (pages >= 1)", name="ck_books_pages_positive"),
        CheckConstraint("price >= 0", name="ck_books_price_nonnegative"),
        CheckConstraint("(rating IS NULL) OR (rating BETWEEN 0 AND 5)", name="ck_books_rating_range"),
        Index("ix_books_title", "title"),
    )
