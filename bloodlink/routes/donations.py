from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from bloodlink.forms.api_form import supplied
from bloodlink.forms.donation_forms import DonationForm
from bloodlink.models.enums import Role
from bloodlink.services import donations as donation_service
from bloodlink.services.donations import DonationPatch
from bloodlink.utils import serialize
from bloodlink.utils.decorators import admin_required, roles_required
from bloodlink.utils.validators import parse_blood_type

donations = Blueprint('donations', __name__)


@donations.route('/', methods=['GET'])
@login_required
@admin_required
def list_donations():
    return jsonify(serialize(donation_service.all_donations()))


@donations.route('/donate', methods=['POST'])
@login_required
def donate():
    form = DonationForm.from_json().validate_or_raise()
    donation = donation_service.create_donation(
        current_user.username,
        blood_type=supplied(form.blood_type),
        amount=supplied(form.amount),
        donation_date=supplied(form.donation_date),
        location=supplied(form.location),
        notes=supplied(form.notes),
        available=supplied(form.available)
    )
    return jsonify(donation.to_dict()), 201


@donations.route('/<int:donation_id>', methods=['PUT'])
@login_required
@admin_required
def update_donation(donation_id):
    form = DonationForm.from_json().validate_or_raise()
    patch = DonationPatch(
        blood_type=supplied(form.blood_type),
        amount=supplied(form.amount),
        donation_date=supplied(form.donation_date),
        location=supplied(form.location),
        notes=supplied(form.notes),
        available=supplied(form.available),
        donor_id=supplied(form.donor_id)
    )
    donation = donation_service.update_donation(donation_id, patch)
    return jsonify(donation.to_dict())


@donations.route('/<int:donation_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_donation(donation_id):
    donation_service.delete_donation(donation_id)
    return jsonify({'message': 'Donation deleted successfully'})


@donations.route('/available', methods=['GET'])
@login_required
def available():
    return jsonify(serialize(donation_service.available_donations()))


@donations.route('/blood-type/<blood_type>', methods=['GET'])
@login_required
def by_blood_type(blood_type):
    return jsonify(serialize(donation_service.available_donations_by_blood_type(blood_type)))


@donations.route('/my-donations', methods=['GET'])
@login_required
@roles_required(Role.DONOR, Role.ADMIN)
def my_donations():
    return jsonify(serialize(donation_service.donations_by_user(current_user.username)))


@donations.route('/<int:donation_id>/mark-used', methods=['PUT'])
@login_required
@admin_required
def mark_used(donation_id):
    donation = donation_service.mark_used(donation_id)
    return jsonify(donation.to_dict())


@donations.route('/recent', methods=['GET'])
@login_required
def recent():
    return jsonify(serialize(donation_service.recent_donations()))


@donations.route('/can-donate', methods=['GET'])
@login_required
def can_donate():
    return jsonify({
        'username': current_user.username,
        'can_donate': donation_service.can_donate(current_user.username)
    })


@donations.route('/<int:donation_id>', methods=['GET'])
@login_required
def get_donation(donation_id):
    return jsonify(donation_service.get_donation(donation_id).to_dict())


@donations.route('/count/<blood_type>', methods=['GET'])
@login_required
def available_count(blood_type):
    return jsonify({
        'blood_type': parse_blood_type(blood_type),
        'count': donation_service.available_count_by_blood_type(blood_type)
    })
