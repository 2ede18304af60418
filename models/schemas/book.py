from datetime import date

from marshmallow import ValidationError, fields, validate, validates

from models.book import DEFAULT_LANGUAGE
from models.schemas.common import Amount, RecordSchema, WholeNumber, non_blank


class BookSchema(RecordSchema):
    title = fields.String(required=True, validate=[non_blank, validate.Length(max=255)])
    author = fields.String(required=True, validate=[non_blank, validate.Length(max=255)])
    isbn = fields.String(allow_none=True, validate=validate.Length(min=10, max=20))
    publisher = fields.String(allow_none=True, validate=validate.Length(max=255))
    publication_year = WholeNumber(allow_none=True, data_key="publicationYear")
    genre = fields.String(allow_none=True, validate=validate.Length(max=100))
    language = fields.String(load_default=DEFAULT_LANGUAGE, validate=[non_blank, validate.Length(max=50)])
    pages = WholeNumber(allow_none=True, validate=validate.Range(min=1))
    price = Amount(required=True, validate=validate.Range(min=0))
    description = fields.String(allow_none=True)
    in_stock = fields.Boolean(load_default=True, data_key="inStock")
    rating = Amount(allow_none=True, validate=validate.Range(min=0, max=5))

    @validates("publication_year")
    def _validate_publication_year(self, value, **kwargs):
        # upper bound follows the calendar: next year's titles may be announced
        if value is not None and not 1000 <= value <= date.today().year + 1:
            raise ValidationError(f"Must be between 1000 and {date.today().year + 1}.")
