from flask import Blueprint, jsonify
from flask_login import login_required
from bloodlink.forms.api_form import supplied
from bloodlink.forms.auth_forms import DonorForm
from bloodlink.services import users as user_service
from bloodlink.services.users import DonorPatch
from bloodlink.utils import serialize
from bloodlink.utils.decorators import admin_required

admin = Blueprint('admin', __name__)


@admin.route('/summary')
@login_required
@admin_required
def summary():
    return jsonify(user_service.summary())


@admin.route('/users')
@login_required
@admin_required
def manage_users():
    return jsonify(serialize(user_service.all_users()))


@admin.route('/users/<int:user_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_user(user_id):
    user_service.delete_user(user_id)
    return jsonify({'message': 'User deleted successfully'})


@admin.route('/donors')
@login_required
@admin_required
def manage_donors():
    return jsonify(serialize(user_service.all_donors()))


@admin.route('/donors/<int:user_id>')
@login_required
@admin_required
def get_donor(user_id):
    return jsonify(user_service.get_donor(user_id).to_dict())


@admin.route('/donors/<int:user_id>', methods=['PUT'])
@login_required
@admin_required
def update_donor(user_id):
    form = DonorForm.from_json().validate_or_raise()
    patch = DonorPatch(
        age=supplied(form.age),
        contact=supplied(form.contact),
        blood_type=supplied(form.blood_type)
    )
    return jsonify(user_service.update_donor(user_id, patch).to_dict())
