from wtforms import StringField, IntegerField, TextAreaField
from wtforms.validators import DataRequired, Optional, Length

from forms.base import ApiForm, FlexibleDateTimeField


class LendForm(ApiForm):
    book_id = IntegerField('Book', validators=[DataRequired(message='Book ID is required')])
    borrower_name = StringField('Borrower', validators=[
        DataRequired(message='Borrower name is required'),
        Length(max=200)
    ])
    borrower_contact = StringField('Contact', validators=[Optional(), Length(max=200)])
    borrowed_date = FlexibleDateTimeField('Borrowed Date', validators=[
        DataRequired(message='Valid borrowed date is required')
    ])
    expected_return_date = FlexibleDateTimeField('Expected Return Date', validators=[Optional()])
    notes = TextAreaField('Notes', validators=[Optional()])


class ReturnForm(ApiForm):
    actual_return_date = FlexibleDateTimeField('Return Date', validators=[Optional()])
