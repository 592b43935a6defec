from wtforms import StringField, FloatField, TextAreaField, BooleanField
from wtforms.validators import DataRequired, Optional, Length, NumberRange

from forms.base import ApiForm, FALSE_VALUES, not_blank_if_present


class WishForm(ApiForm):
    book_name = StringField('Book Name', validators=[DataRequired(message='Book name is required'), Length(max=500)])
    author_name = StringField('Author Name', validators=[DataRequired(message='Author name is required'), Length(max=300)])
    notes = TextAreaField('Notes', validators=[Optional()])
    price = FloatField('Price', validators=[Optional(), NumberRange(min=0, message='Price must be a positive number')])
    publisher = StringField('Publisher', validators=[Optional(), Length(max=200)])


class WishUpdateForm(WishForm):
    book_name = StringField('Book Name', validators=[not_blank_if_present('Book name cannot be empty'), Length(max=500)])
    author_name = StringField('Author Name', validators=[not_blank_if_present('Author name cannot be empty'), Length(max=300)])
    is_purchased = BooleanField('Purchased', false_values=FALSE_VALUES)
