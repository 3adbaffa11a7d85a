from marshmallow import EXCLUDE, Schema, fields, pre_load, validate


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class UserCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = {**data, "email": _norm_email(data["email"])}
        return data


class UserUpdateSchema(UserCreateSchema):
    pass


class UserLoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)
    expires_in_seconds = fields.Integer(load_default=None, allow_none=True, strict=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = {**data, "email": _norm_email(data["email"])}
        return data


class UserOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    email = fields.String()


class LoginOutSchema(UserOutSchema):
    token = fields.String()
    refresh_token = fields.String()
