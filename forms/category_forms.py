from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Optional, Length, Regexp

from forms.base import ApiForm, not_blank_if_present

HEX_COLOR = Regexp(r'^#[0-9A-Fa-f]{6}$', message='Color must be a valid hex color (e.g., #3B82F6)')


class CategoryForm(ApiForm):
    name = StringField('Category Name', validators=[
        DataRequired(message='Category name is required'),
        Length(min=1, max=100, message='Category name must be between 1 and 100 characters')
    ])
    color = StringField('Color', validators=[Optional(), HEX_COLOR])
    description = TextAreaField('Description', validators=[Optional()])


class CategoryUpdateForm(CategoryForm):
    name = StringField('Category Name', validators=[
        not_blank_if_present('Category name cannot be empty'),
        Length(max=100)
    ])
