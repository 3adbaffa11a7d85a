from marshmallow import EXCLUDE, Schema, fields, validates, post_load, ValidationError

from utils.profanity import PROFANE_WORDS, clean_body

CHIRP_MAX_LENGTH = 140


class ChirpCreateSchema(Schema):
    class Meta:
        # clients may still send user_id; the owner always comes from the token
        unknown = EXCLUDE

    body = fields.String(required=True)

    def __init__(self, *args, max_length: int = CHIRP_MAX_LENGTH, profane_words=PROFANE_WORDS, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_length = max_length
        self.profane_words = tuple(profane_words)

    @validates("body")
    def validate_body(self, value, **kwargs):
        if not value.strip():
            raise ValidationError("Chirp body must not be empty.")
        if len(value) > self.max_length:
            raise ValidationError(f"Chirp is too long (max {self.max_length} characters).")

    @post_load
    def clean(self, data, **kwargs):
        body = clean_body(data["body"], self.profane_words)
        # masks longer than a configured word can grow the body
        if len(body) > self.max_length:
            raise ValidationError(
                f"Chirp is too long after filtering (max {self.max_length} characters).", "body"
            )
        data["body"] = body
        return data


class ChirpOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    body = fields.String()
    user_id = fields.String()
