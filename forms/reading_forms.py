from wtforms import IntegerField, TextAreaField, BooleanField
from wtforms.validators import DataRequired, InputRequired, Optional, NumberRange

from forms.base import ApiForm, FALSE_VALUES


class ProgressForm(ApiForm):
    current_page = IntegerField('Current Page', validators=[
        InputRequired(message='Current page is required'),
        NumberRange(min=1, message='Current page must be at least 1')
    ])
    total_pages = IntegerField('Total Pages', validators=[
        Optional(),
        NumberRange(min=1, message='Total pages must be at least 1')
    ])
    notes = TextAreaField('Notes', validators=[Optional()])


class StartReadingForm(ProgressForm):
    book_id = IntegerField('Book', validators=[DataRequired(message='Book ID is required')])


class FinishReadingForm(ApiForm):
    mark_read = BooleanField('Mark as read', false_values=FALSE_VALUES)
    rating = IntegerField('Rating', validators=[Optional(), NumberRange(min=1, max=5, message='Rating must be between 1 and 5')])
    notes = TextAreaField('Notes', validators=[Optional()])
