from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from bloodlink.forms.api_form import supplied
from bloodlink.forms.donation_forms import BloodRequestForm
from bloodlink.models.enums import RequestStatus
from bloodlink.services import blood_requests as request_service
from bloodlink.services.blood_requests import BloodRequestPatch
from bloodlink.utils import serialize
from bloodlink.utils.decorators import admin_required

blood_requests = Blueprint('blood_requests', __name__)


@blood_requests.route('/', methods=['GET'])
@login_required
@admin_required
def list_requests():
    return jsonify(serialize(request_service.all_requests()))


@blood_requests.route('/request', methods=['POST'])
@login_required
def create_request():
    form = BloodRequestForm.from_json().validate_or_raise()
    blood_request = request_service.create_blood_request(
        current_user.username,
        blood_type=supplied(form.blood_type),
        amount=supplied(form.amount),
        urgency=supplied(form.urgency),
        requester_name=supplied(form.requester_name),
        hospital_name=supplied(form.hospital_name),
        reason=supplied(form.reason),
        needed_by_date=supplied(form.needed_by_date),
        request_date=supplied(form.request_date),
        status=supplied(form.status)
    )
    return jsonify(blood_request.to_dict()), 201


@blood_requests.route('/<int:request_id>', methods=['PUT'])
@login_required
@admin_required
def update_request(request_id):
    form = BloodRequestForm.from_json().validate_or_raise()
    patch = BloodRequestPatch(
        blood_type=supplied(form.blood_type),
        amount=supplied(form.amount),
        urgency=supplied(form.urgency),
        requester_name=supplied(form.requester_name),
        hospital_name=supplied(form.hospital_name),
        reason=supplied(form.reason),
        needed_by_date=supplied(form.needed_by_date),
        status=supplied(form.status)
    )
    blood_request = request_service.update_blood_request(request_id, patch)
    return jsonify(blood_request.to_dict())


@blood_requests.route('/<int:request_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_request(request_id):
    request_service.delete_blood_request(request_id)
    return jsonify({'message': 'Blood request deleted successfully'})


@blood_requests.route('/<int:request_id>/fulfill', methods=['PUT'])
@login_required
@admin_required
def fulfill(request_id):
    return jsonify(request_service.fulfill_request(request_id).to_dict())


@blood_requests.route('/<int:request_id>/cancel', methods=['PUT'])
@login_required
def cancel(request_id):
    return jsonify(request_service.cancel_request(request_id, current_user.username).to_dict())


@blood_requests.route('/blood-type/<blood_type>', methods=['GET'])
@login_required
def by_blood_type(blood_type):
    return jsonify(serialize(request_service.requests_by_blood_type(blood_type)))


@blood_requests.route('/pending', methods=['GET'])
@login_required
def pending():
    return jsonify(serialize(request_service.pending_requests()))


@blood_requests.route('/urgent', methods=['GET'])
@login_required
def urgent():
    return jsonify(serialize(request_service.urgent_requests()))


@blood_requests.route('/my-requests', methods=['GET'])
@login_required
def my_requests():
    return jsonify(serialize(request_service.requests_by_user(current_user.username)))


@blood_requests.route('/recent', methods=['GET'])
@login_required
def recent():
    return jsonify(serialize(request_service.recent_requests()))


@blood_requests.route('/hospital/<hospital_name>', methods=['GET'])
@login_required
def by_hospital(hospital_name):
    return jsonify(serialize(request_service.requests_by_hospital(hospital_name)))


@blood_requests.route('/overdue', methods=['GET'])
@login_required
@admin_required
def overdue():
    return jsonify(serialize(request_service.overdue_requests()))


@blood_requests.route('/statistics', methods=['GET'])
@login_required
@admin_required
def statistics():
    stats = {status.value.lower(): request_service.count_by_status(status.value)
             for status in RequestStatus}
    stats['urgent'] = request_service.urgent_count()
    return jsonify(stats)


@blood_requests.route('/<int:request_id>', methods=['GET'])
@login_required
def get_request(request_id):
    return jsonify(request_service.get_blood_request(request_id).to_dict())
