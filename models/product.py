from sqlalchemy import Boolean, CheckConstraint, Column, Numeric, String, Text

from models.base_model import BaseModel, Base


class Product(BaseModel, Base):
    __tablename__ = "products"

    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # validated >= 0 (in schema)
    description = Column(Text, nullable=True)
    in_stock = Column(Boolean, nullable=False, default=True)
    image = Column(String(500), nullable=True)  # public path of the uploaded file

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_nonnegative"),
    )
