from ..extensions import db
from ..utils import float_or_none, isoformat, utcnow

STATUSES = ("active", "inactive", "pending")


class Tenant(db.Model):
    __tablename__ = "tenant"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    property_id = db.Column(db.Integer, db.ForeignKey("property.id"), nullable=False, index=True)
    unit = db.Column(db.String(64), nullable=False)

    # Lease Agreement Information
    lease_start = db.Column(db.DateTime, nullable=False)
    lease_end = db.Column(db.DateTime, nullable=False)
    rent = db.Column(db.Numeric(10, 2), nullable=False)
    security_deposit = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default="active")
    emergency_contact = db.Column(db.JSON)  # name, phone, relationship

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    user = db.relationship("User")
    property = db.relationship("Property", back_populates="tenants")
    payments = db.relationship("Payment", back_populates="tenant")
    maintenance = db.relationship("Maintenance", back_populates="tenant")

    def serialize(self):
        return {
            "id": self.id,
            "user": self.user.summary() if self.user else None,
            "property": self.property.summary() if self.property else None,
            "unit": self.unit,
            "leaseStart": isoformat(self.lease_start),
            "leaseEnd": isoformat(self.lease_end),
            "rent": float_or_none(self.rent),
            "securityDeposit": float_or_none(self.security_deposit),
            "status": self.status,
            "emergencyContact": self.emergency_contact,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
