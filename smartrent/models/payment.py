from ..extensions import db
from ..utils import float_or_none, isoformat, utcnow

STATUSES = ("pending", "paid", "overdue", "partial")
METHODS = ("cash", "check", "bank transfer", "credit card", "online")


class Payment(db.Model):
    __tablename__ = "payment"
    __table_args__ = (
        db.Index("ix_payment_tenant_date", "tenant_id", "payment_date"),
        db.Index("ix_payment_status_due", "status", "due_date"),
    )
    id = db.Column(db.Integer, primary_key=True)
    # Nullable so the ledger outlives removed tenants and properties
    tenant_id = db.Column(db.Integer, db.ForeignKey("tenant.id", ondelete="SET NULL"))
    property_id = db.Column(db.Integer, db.ForeignKey("property.id", ondelete="SET NULL"))
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    payment_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    due_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending")
    method = db.Column(db.String(20), nullable=False, default="online")
    month = db.Column(db.String(32), nullable=False)
    reference = db.Column(db.String(120))
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    tenant = db.relationship("Tenant", back_populates="payments")
    property = db.relationship("Property", back_populates="payments")

    def serialize(self):
        return {
            "id": self.id,
            "tenant": self.tenant.serialize() if self.tenant else None,
            "property": self.property.summary() if self.property else None,
            "amount": float_or_none(self.amount),
            "paymentDate": isoformat(self.payment_date),
            "dueDate": isoformat(self.due_date),
            "status": self.status,
            "method": self.method,
            "month": self.month,
            "reference": self.reference,
            "notes": self.notes,
            "createdAt": isoformat(self.created_at),
        }
