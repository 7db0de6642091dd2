from marshmallow import Schema, fields, validate


class CreateNotebookSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(load_default=None, allow_none=True)


class AddNotebookWordSchema(Schema):
    word_id = fields.Int(required=True, validate=validate.Range(min=1))
