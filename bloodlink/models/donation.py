from bloodlink import db
from bloodlink.models.enums import AppointmentStatus, RequestStatus


def _iso(value):
    return value.isoformat() if value else None


class Donation(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    blood_type = db.Column(db.String(3), nullable=False)
    amount = db.Column(db.Integer, nullable=False)  # pints
    available = db.Column(db.Boolean, nullable=False, default=True)
    donation_date = db.Column(db.Date, nullable=False)
    location = db.Column(db.String(200), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    donor_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)

    donor = db.relationship('User', foreign_keys=[donor_id])

    def mark_used(self):
        self.available = False

    def to_dict(self):
        return {
            'id': self.id,
            'blood_type': self.blood_type,
            'amount': self.amount,
            'available': self.available,
            'donation_date': _iso(self.donation_date),
            'location': self.location,
            'notes': self.notes,
            'donor': self.donor.username if self.donor else None,
        }

    def __repr__(self):
        return f"Donation('{self.blood_type}', '{self.amount}', '{self.donation_date}')"


class BloodRequest(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    blood_type = db.Column(db.String(3), nullable=False)
    amount = db.Column(db.Integer, nullable=False)
    urgency = db.Column(db.String(10), nullable=False)  # Low, Medium, High
    requester_name = db.Column(db.String(100), nullable=True)
    hospital_name = db.Column(db.String(100), nullable=True)
    reason = db.Column(db.Text, nullable=True)
    needed_by_date = db.Column(db.Date, nullable=True)
    request_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=RequestStatus.PENDING.value)  # Pending, Fulfilled, Cancelled
    requester_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True)

    requester = db.relationship('User', foreign_keys=[requester_id])

    @property
    def status_enum(self):
        return RequestStatus.parse(self.status)

    def mark_fulfilled(self):
        self.status = RequestStatus.FULFILLED.value

    def mark_cancelled(self):
        self.status = RequestStatus.CANCELLED.value

    def to_dict(self):
        return {
            'id': self.id,
            'blood_type': self.blood_type,
            'amount': self.amount,
            'urgency': self.urgency,
            'requester_name': self.requester_name,
            'hospital_name': self.hospital_name,
            'reason': self.reason,
            'needed_by_date': _iso(self.needed_by_date),
            'request_date': _iso(self.request_date),
            'status': self.status,
            'requester': self.requester.username if self.requester else None,
        }

    def __repr__(self):
        return f"BloodRequest('{self.blood_type}', '{self.urgency}', '{self.status}')"


class Appointment(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    blood_type = db.Column(db.String(3), nullable=True)
    appointment_date = db.Column(db.Date, nullable=False)
    location = db.Column(db.String(200), nullable=True)
    status = db.Column(db.String(20), nullable=False, default=AppointmentStatus.PENDING.value)  # Pending, Confirmed, Completed, Cancelled
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)

    user = db.relationship('User', foreign_keys=[user_id])

    def to_dict(self):
        return {
            'id': self.id,
            'blood_type': self.blood_type,
            'appointment_date': _iso(self.appointment_date),
            'location': self.location,
            'status': self.status,
            'user': self.user.username if self.user else None,
        }

    def __repr__(self):
        return f"Appointment('{self.appointment_date}', '{self.status}')"
