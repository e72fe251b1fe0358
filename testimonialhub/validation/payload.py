# testimonialhub/validation/payload.py
"""Run WTForms forms against decoded JSON bodies.

JSON is flattened into a MultiDict the way a browser would post nested
form fields (``theme-primaryColor``, ``customQuestions-0-question``), so the
stock field classes do the coercion. Nothing here touches the database.
"""
from __future__ import annotations

from typing import Any

from werkzeug.datastructures import MultiDict
from wtforms import FieldList, Form, FormField

from ..exceptions import ValidationFailed
from .validators import JSONBoolean

SEPARATOR = "-"


def _flatten(value: Any, key: str, items: list) -> None:
    if value is None:
        return
    if isinstance(value, dict):
        for k, v in value.items():
            _flatten(v, f"{key}{SEPARATOR}{k}" if key else str(k), items)
    elif isinstance(value, (list, tuple)):
        for i, v in enumerate(value):
            _flatten(v, f"{key}{SEPARATOR}{i}", items)
    elif isinstance(value, bool):
        items.append((key, JSONBoolean("true" if value else "false")))
    elif isinstance(value, float) and value.is_integer():
        items.append((key, str(int(value))))
    else:
        items.append((key, str(value)))


def to_formdata(payload: dict) -> MultiDict:
    items: list = []
    _flatten(payload, "", items)
    return MultiDict(items)


def _path(name: str) -> str:
    return name.replace(SEPARATOR, ".")


def _field_errors(field, out: list) -> None:
    if isinstance(field, FormField):
        for sub in field.form:
            _field_errors(sub, out)
    elif isinstance(field, FieldList):
        for entry in field.entries:
            _field_errors(entry, out)
    else:
        out.extend({"field": _path(field.name), "message": str(m)} for m in field.errors)


def _field_data(field):
    if isinstance(field, FormField):
        return {sub.short_name: _field_data(sub) for sub in field.form}
    if isinstance(field, FieldList):
        return [_field_data(entry) for entry in field.entries]
    return field.data


def validate_payload(form_cls: type[Form], payload: Any, partial: bool = False) -> dict:
    """Validate ``payload`` with ``form_cls`` and return the cleaned values.

    Keys of the result are the JSON names of the fields. With ``partial``
    only the top-level keys present in the payload are checked and returned,
    which is what PATCH handlers want. A top-level ``null`` counts as absent
    there, so it never resets a stored value.

    Raises ValidationFailed with every violated rule of every field.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationFailed([{"field": "body", "message": "Expected a JSON object"}])
    if partial:
        payload = {k: v for k, v in payload.items() if v is not None}

    form = form_cls(formdata=to_formdata(payload))
    form.validate()

    fields = [f for f in form if not partial or f.short_name in payload]
    errors: list[dict] = []
    for field in fields:
        _field_errors(field, errors)
    if errors:
        raise ValidationFailed(errors)

    return {f.short_name: _field_data(f) for f in fields}
