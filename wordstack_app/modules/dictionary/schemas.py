from marshmallow import EXCLUDE, Schema, fields, validate


class _LenientSchema(Schema):
    """LLM output often carries extra keys; ignore them."""

    class Meta:
        unknown = EXCLUDE


# --- LLM payload ---

class ExamplePayloadSchema(_LenientSchema):
    en = fields.Str(required=True, validate=validate.Length(min=1))
    translated = fields.Str(required=True, validate=validate.Length(min=1))


class SensePayloadSchema(_LenientSchema):
    pos = fields.Str(required=True, validate=validate.Length(min=1))
    definition_localized = fields.Str(required=True, validate=validate.Length(min=1))
    definition_en = fields.Str(required=True, validate=validate.Length(min=1))
    examples = fields.List(
        fields.Nested(ExamplePayloadSchema), required=True, validate=validate.Length(min=1)
    )


class PhoneticPayloadSchema(_LenientSchema):
    uk = fields.Str(allow_none=True, load_default=None)
    us = fields.Str(allow_none=True, load_default=None)
    general = fields.Str(allow_none=True, load_default=None)


class WordPayloadSchema(_LenientSchema):
    word = fields.Str(allow_none=True, load_default=None)
    phonetic = fields.Nested(PhoneticPayloadSchema, load_default=dict)
    senses = fields.List(
        fields.Nested(SensePayloadSchema), required=True, validate=validate.Length(min=1)
    )


# --- Requests ---

class WordSearchQuerySchema(Schema):
    query = fields.Str(load_default='')
    limit = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))
