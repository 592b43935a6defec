from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Optional, Length

from forms.base import ApiForm, FlexibleDateField, not_blank_if_present


class AuthorForm(ApiForm):
    name = StringField('Name', validators=[DataRequired(message='Author name is required'), Length(max=300)])
    biography = TextAreaField('Biography', validators=[Optional()])
    nationality = StringField('Nationality', validators=[Optional(), Length(max=100)])
    birth_date = FlexibleDateField('Birth Date', validators=[Optional()])
    death_date = FlexibleDateField('Death Date', validators=[Optional()])


class AuthorUpdateForm(AuthorForm):
    name = StringField('Name', validators=[not_blank_if_present('Author name cannot be empty'), Length(max=300)])
