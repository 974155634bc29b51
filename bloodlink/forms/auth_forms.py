from wtforms import StringField, PasswordField, IntegerField
from wtforms.validators import DataRequired, Length, Email, NumberRange, Optional
from bloodlink.forms.api_form import ApiForm


class RegistrationForm(ApiForm):
    username = StringField('Username', validators=[DataRequired(), Length(min=3, max=80)])
    email = StringField('Email', validators=[DataRequired(), Email(), Length(max=120)])
    password = PasswordField('Password', validators=[DataRequired(), Length(min=6)])
    role = StringField('Role', validators=[Optional()])

    # Donor fields
    age = IntegerField('Age', validators=[Optional(), NumberRange(min=1, max=120)])
    contact = StringField('Contact', validators=[Optional(), Length(max=30)])
    blood_type = StringField('Blood Type', validators=[Optional()])


class LoginForm(ApiForm):
    username = StringField('Username', validators=[DataRequired()])
    password = PasswordField('Password', validators=[DataRequired()])


class OtpVerificationForm(ApiForm):
    username = StringField('Username', validators=[DataRequired()])
    otp = StringField('OTP', validators=[DataRequired()])


class ResetPasswordRequestForm(ApiForm):
    email = StringField('Email', validators=[DataRequired(), Email()])


class ResetPasswordForm(ApiForm):
    email = StringField('Email', validators=[DataRequired(), Email()])
    otp = StringField('OTP', validators=[DataRequired()])
    new_password = PasswordField('New Password', validators=[DataRequired(), Length(min=6)])


class DonorForm(ApiForm):
    # Ranges and blood types are checked by the user service
    age = IntegerField('Age', validators=[Optional()])
    contact = StringField('Contact', validators=[Optional(), Length(max=30)])
    blood_type = StringField('Blood Type', validators=[Optional()])
