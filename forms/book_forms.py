from wtforms import StringField, IntegerField, FloatField, TextAreaField, BooleanField
from wtforms.validators import DataRequired, Optional, Length, NumberRange

from forms.base import ApiForm, FlexibleDateTimeField, FALSE_VALUES, not_blank_if_present


class BookForm(ApiForm):
    title = StringField('Title', validators=[DataRequired(message='Title is required'), Length(max=500)])
    author_first_name = StringField('Author First Name', validators=[Optional(), Length(max=150)])
    author_last_name = StringField('Author Last Name', validators=[Optional(), Length(max=150)])
    author_id = IntegerField('Author ID', validators=[Optional()])
    translator = StringField('Translator', validators=[Optional(), Length(max=300)])

    category_id = IntegerField('Category ID', validators=[Optional()])
    sub_category = StringField('Sub-category', validators=[Optional(), Length(max=100)])

    publisher = StringField('Publisher', validators=[Optional(), Length(max=200)])
    description = TextAreaField('Description', validators=[Optional()])
    pages = IntegerField('Pages', validators=[Optional(), NumberRange(min=1, message='Pages must be a positive integer')])
    publication_year = IntegerField('Publication Year', validators=[
        Optional(),
        NumberRange(min=1000, max=2100, message='Publication year must be between 1000 and 2100')
    ])
    price = FloatField('Price', validators=[Optional(), NumberRange(min=0, message='Price must be a positive number')])

    rating = IntegerField('Rating', validators=[Optional(), NumberRange(min=1, max=5, message='Rating must be between 1 and 5')])
    is_read = BooleanField('Read', false_values=FALSE_VALUES)
    is_wishlist = BooleanField('Wishlist', false_values=FALSE_VALUES)
    notes = TextAreaField('Notes', validators=[Optional()])


class BookUpdateForm(BookForm):
    title = StringField('Title', validators=[not_blank_if_present('Title cannot be empty'), Length(max=500)])


class MarkReadForm(ApiForm):
    rating = IntegerField('Rating', validators=[Optional(), NumberRange(min=1, max=5, message='Rating must be between 1 and 5')])
    notes = TextAreaField('Notes', validators=[Optional()])
    finish_date = FlexibleDateTimeField('Finish Date', validators=[Optional()])
