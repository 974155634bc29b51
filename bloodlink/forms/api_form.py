from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import ImmutableMultiDict
from bloodlink.errors import InvalidInput


def _as_form_value(value):
    """
    Render a JSON value the way a browser would post it. Booleans become
    "true"/"false" so BooleanField reads them and IntegerField rejects them.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        return value
    return str(value)


class ApiForm(FlaskForm):
    """
    Form fed from a JSON request body. Bearer tokens authenticate the API,
    so CSRF protection is off.
    """

    class Meta:
        csrf = False

    @classmethod
    def from_json(cls):
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
        # JSON nulls count as "not supplied"
        formdata = ImmutableMultiDict({
            key: _as_form_value(value) for key, value in payload.items() if value is not None
        })
        return cls(formdata=formdata)

    def validate_or_raise(self):
        if not self.validate():
            field, errors = next(iter(self.errors.items()))
            raise InvalidInput(f"{field}: {errors[0]}")
        return self


def supplied(field):
    """
    The field's value if the client sent it, else None
    """
    return field.data if field.raw_data else None
