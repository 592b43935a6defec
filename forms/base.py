from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import Field
from wtforms.validators import ValidationError as FieldError
from wtforms.widgets import TextInput

from services.dates import normalize_date, normalize_datetime
from services.errors import ValidationError

# Accepted "false" spellings for BooleanField once JSON values are stringified
FALSE_VALUES = ('false', 'False', '0', '')


def _as_form_value(value):
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def json_formdata():
    """
    Turn the JSON request body into form data so WTForms can validate it.
    Null values are treated as absent.
    """
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError([{'field': None, 'msg': 'Request body must be a JSON object'}])
    return MultiDict({
        key: _as_form_value(value)
        for key, value in payload.items()
        if value is not None
    })


def not_blank_if_present(message):
    """Allow the field to be omitted, but not sent as an empty string."""
    def _validate(form, field):
        if field.raw_data and not (field.data or '').strip():
            raise FieldError(message)
    return _validate


class FlexibleDateTimeField(Field):
    """Accepts ISO-8601 strings or epoch seconds/milliseconds."""
    widget = TextInput()

    def _convert(self, value):
        return normalize_datetime(value)

    def _value(self):
        if self.raw_data:
            return ' '.join(self.raw_data)
        return self.data.isoformat() if self.data else ''

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        try:
            self.data = self._convert(valuelist[0])
        except ValueError as exc:
            self.data = None
            raise ValueError(self.gettext('Not a valid date value.')) from exc


class FlexibleDateField(FlexibleDateTimeField):

    def _convert(self, value):
        return normalize_date(value)


class ApiForm(FlaskForm):
    """Base for JSON request bodies: no CSRF, errors raised as ValidationError."""

    class Meta:
        csrf = False

    @classmethod
    def from_json(cls, **kwargs):
        form = cls(formdata=json_formdata(), **kwargs)
        if not form.validate():
            raise ValidationError(form.error_list())
        return form

    def error_list(self):
        return [
            {'field': name, 'msg': message}
            for name, messages in self.errors.items()
            for message in messages
        ]

    def cleaned_data(self, partial=False):
        """
        Field values ready for the model layer. With partial=True only the
        fields present in the request are returned.
        """
        data = {}
        for name, field in self._fields.items():
            if partial and not field.raw_data:
                continue
            value = field.data
            if isinstance(value, str):
                value = value.strip() or None
            data[name] = value
        return data
