from marshmallow import Schema, fields, validate


class RegisterSchema(Schema):
    username = fields.Str(required=True, validate=validate.Length(min=3, max=80))
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6, max=128))


class LoginSchema(Schema):
    """``login`` accepts a username or an email address."""
    login = fields.Str(required=True, validate=validate.Length(min=1))
    password = fields.Str(required=True, load_only=True)
    remember = fields.Bool(load_default=False)
