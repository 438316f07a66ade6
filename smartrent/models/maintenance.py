from ..extensions import db
from ..utils import float_or_none, isoformat, utcnow

PRIORITIES = ("low", "medium", "high", "emergency")
STATUSES = ("pending", "assigned", "in-progress", "completed", "cancelled")


class Maintenance(db.Model):
    __tablename__ = "maintenance"
    __table_args__ = (
        db.Index("ix_maintenance_property_status", "property_id", "status"),
        db.Index("ix_maintenance_priority_created", "priority", "created_at"),
    )
    id = db.Column(db.Integer, primary_key=True)
    property_id = db.Column(db.Integer, db.ForeignKey("property.id"), nullable=False)
    tenant_id = db.Column(db.Integer, db.ForeignKey("tenant.id", ondelete="SET NULL"))
    issue = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    priority = db.Column(db.String(20), nullable=False, default="medium")
    status = db.Column(db.String(20), nullable=False, default="pending")
    reported_by = db.Column(db.String(20), nullable=False)  # tenant | owner
    assigned_to = db.Column(db.JSON)  # name, phone, company
    estimated_cost = db.Column(db.Numeric(10, 2))
    actual_cost = db.Column(db.Numeric(10, 2))
    completion_date = db.Column(db.DateTime)
    images = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    property = db.relationship("Property", back_populates="maintenance")
    tenant = db.relationship("Tenant", back_populates="maintenance")

    def serialize(self):
        return {
            "id": self.id,
            "property": self.property.summary() if self.property else None,
            "tenant": self.tenant.serialize() if self.tenant else None,
            "issue": self.issue,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "reportedBy": self.reported_by,
            "assignedTo": self.assigned_to,
            "estimatedCost": float_or_none(self.estimated_cost),
            "actualCost": float_or_none(self.actual_cost),
            "completionDate": isoformat(self.completion_date),
            "images": self.images or [],
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
