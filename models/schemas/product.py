from marshmallow import fields, validate

from models.schemas.common import Amount, RecordSchema, non_blank


class ProductSchema(RecordSchema):
    name = fields.String(required=True, validate=[non_blank, validate.Length(max=255)])
    price = Amount(required=True, validate=validate.Range(min=0))
    description = fields.String(allow_none=True)
    in_stock = fields.Boolean(load_default=True, data_key="inStock")
    image = fields.String(allow_none=True, validate=validate.Length(max=500))
