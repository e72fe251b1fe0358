# testimonialhub/validation/validators.py
from wtforms.validators import StopValidation, ValidationError


def strip_filter(value):
    return value.strip() if isinstance(value, str) else value


class LettersAndSpaces:
    """Any Unicode letter or a plain space; digits, hyphens and other punctuation fail."""

    def __init__(self, message=None):
        self.message = message or "Only letters and spaces are allowed."

    def __call__(self, form, field):
        value = field.data or ""
        if not value or not all(ch == " " or ch.isalpha() for ch in value):
            raise ValidationError(self.message)


class MinWords:
    """Counts whitespace-delimited, non-empty tokens."""

    def __init__(self, count: int, message=None):
        self.count = count
        self.message = message or f"Must contain at least {count} words."

    def __call__(self, form, field):
        if len((field.data or "").split()) < self.count:
            raise ValidationError(self.message)


class JSONBoolean(str):
    """Form value that came from a JSON true/false rather than a string."""


class StrictBoolean:
    """Rejects anything but a JSON true/false; the strings "true" and "false" fail too."""

    def __init__(self, message=None):
        self.message = message or "Must be a boolean."

    def __call__(self, form, field):
        raw = field.raw_data[0] if field.raw_data else None
        if not isinstance(raw, JSONBoolean):
            raise ValidationError(self.message)


class Provided:
    """The key must be present in the payload; an empty string still counts."""

    def __init__(self, message=None):
        self.message = message or "Required"
        self.field_flags = {"required": True}

    def __call__(self, form, field):
        if not field.raw_data:
            field.errors[:] = []
            raise StopValidation(self.message)
