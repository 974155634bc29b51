from wtforms import StringField, IntegerField, TextAreaField, BooleanField, DateField
from wtforms.validators import Length, NumberRange, Optional
from bloodlink.forms.api_form import ApiForm

# Ids fit a 32-bit INTEGER column
MAX_ID = 2 ** 31 - 1


class DonationForm(ApiForm):
    # Blood type and amount rules are enforced by the donation service
    blood_type = StringField('Blood Type', validators=[Optional()])
    amount = IntegerField('Amount (pints)', validators=[Optional()])
    donation_date = DateField('Donation Date', validators=[Optional()])
    location = StringField('Location', validators=[Optional(), Length(max=200)])
    notes = TextAreaField('Notes', validators=[Optional()])
    available = BooleanField('Available')
    donor_id = IntegerField('Donor', validators=[Optional(), NumberRange(min=1, max=MAX_ID)])


class BloodRequestForm(ApiForm):
    blood_type = StringField('Blood Type', validators=[Optional()])
    amount = IntegerField('Amount', validators=[Optional()])
    urgency = StringField('Urgency', validators=[Optional()])
    requester_name = StringField('Requester Name', validators=[Optional(), Length(max=100)])
    hospital_name = StringField('Hospital Name', validators=[Optional(), Length(max=100)])
    reason = TextAreaField('Reason', validators=[Optional()])
    needed_by_date = DateField('Needed By', validators=[Optional()])
    request_date = DateField('Request Date', validators=[Optional()])
    status = StringField('Status', validators=[Optional()])


class AppointmentForm(ApiForm):
    blood_type = StringField('Blood Type', validators=[Optional()])
    appointment_date = DateField('Appointment Date', validators=[Optional()])
    location = StringField('Location', validators=[Optional(), Length(max=200)])


class StatusForm(ApiForm):
    status = StringField('Status', validators=[Optional()])
