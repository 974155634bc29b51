from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from bloodlink.forms.auth_forms import (
    RegistrationForm, LoginForm, OtpVerificationForm,
    ResetPasswordRequestForm, ResetPasswordForm
)
from bloodlink.forms.api_form import supplied
from bloodlink.services import auth as auth_service

auth = Blueprint('auth', __name__)


@auth.route('/register', methods=['POST'])
def register():
    form = RegistrationForm.from_json().validate_or_raise()
    user = auth_service.register(
        username=form.username.data,
        email=form.email.data,
        password=form.password.data,
        role=supplied(form.role),
        age=supplied(form.age),
        contact=supplied(form.contact),
        blood_type=supplied(form.blood_type)
    )
    return jsonify({'message': 'User registered successfully!', 'user': user.to_dict()}), 201


@auth.route('/login', methods=['POST'])
def login():
    form = LoginForm.from_json().validate_or_raise()
    auth_service.login_step1(form.username.data, form.password.data)
    return jsonify({'message': 'OTP sent to your email. Verify it to finish logging in.'})


@auth.route('/verify-otp', methods=['POST'])
def verify_otp():
    form = OtpVerificationForm.from_json().validate_or_raise()
    return jsonify(auth_service.login_step2(form.username.data, form.otp.data))


@auth.route('/request-reset', methods=['POST'])
def request_reset():
    form = ResetPasswordRequestForm.from_json().validate_or_raise()
    auth_service.request_password_reset(form.email.data)
    return jsonify({'message': 'An OTP has been sent to your email to reset your password.'})


@auth.route('/reset-password', methods=['POST'])
def reset_password():
    form = ResetPasswordForm.from_json().validate_or_raise()
    auth_service.reset_password(form.email.data, form.otp.data, form.new_password.data)
    return jsonify({'message': 'Your password has been updated! You can now log in.'})


@auth.route('/me')
@login_required
def me():
    return jsonify({
        'username': current_user.username,
        'role': current_user.role.value,
        'authority': current_user.authority
    })
