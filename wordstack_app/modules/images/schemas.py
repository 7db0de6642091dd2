from marshmallow import Schema, fields, validate


class GenerateWordImageSchema(Schema):
    word = fields.Str(required=True, validate=validate.Length(min=1, max=100))
