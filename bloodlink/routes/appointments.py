from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user
from bloodlink.forms.api_form import supplied
from bloodlink.forms.donation_forms import AppointmentForm, StatusForm
from bloodlink.services import appointments as appointment_service
from bloodlink.utils import paginated
from bloodlink.utils.decorators import admin_required

appointments = Blueprint('appointments', __name__)


@appointments.route('/book', methods=['POST'])
@login_required
def book():
    form = AppointmentForm.from_json().validate_or_raise()
    appointment = appointment_service.book_appointment(
        current_user.username,
        appointment_date=supplied(form.appointment_date),
        blood_type=supplied(form.blood_type),
        location=supplied(form.location)
    )
    return jsonify(appointment.to_dict()), 201


@appointments.route('/my', methods=['GET'])
@login_required
def my_appointments():
    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('per_page', 10, type=int)
    return jsonify(paginated(appointment_service.appointments_for_user(
        current_user.username, page=page, per_page=per_page)))


@appointments.route('/all', methods=['GET'])
@login_required
@admin_required
def all_appointments():
    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('per_page', 10, type=int)
    return jsonify(paginated(appointment_service.all_appointments(page=page, per_page=per_page)))


@appointments.route('/<int:appointment_id>/status', methods=['PUT'])
@login_required
@admin_required
def update_status(appointment_id):
    form = StatusForm.from_json().validate_or_raise()
    appointment = appointment_service.update_appointment_status(appointment_id, supplied(form.status))
    return jsonify(appointment.to_dict())
