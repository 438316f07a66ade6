from ..extensions import db
from ..utils import float_or_none, isoformat, utcnow


class Property(db.Model):
    __tablename__ = "property"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    address = db.Column(db.JSON, nullable=False, default=dict)  # street, city, state, zipCode, country
    rent = db.Column(db.Numeric(10, 2), nullable=False)
    bedrooms = db.Column(db.Integer, nullable=False)
    bathrooms = db.Column(db.Numeric(4, 1), nullable=False)
    area = db.Column(db.Numeric(10, 2), nullable=False)
    description = db.Column(db.Text)
    features = db.Column(db.JSON, nullable=False, default=list)
    images = db.Column(db.JSON, nullable=False, default=list)
    is_available = db.Column(db.Boolean, nullable=False, default=True, index=True)
    owner_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    owner = db.relationship("User")
    tenants = db.relationship("Tenant", back_populates="property", cascade="all, delete-orphan")
    payments = db.relationship("Payment", back_populates="property")
    maintenance = db.relationship(
        "Maintenance", back_populates="property", cascade="all, delete-orphan"
    )

    def summary(self):
        return {"id": self.id, "name": self.name, "address": self.address}

    def serialize(self):
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "rent": float_or_none(self.rent),
            "bedrooms": self.bedrooms,
            "bathrooms": float_or_none(self.bathrooms),
            "area": float_or_none(self.area),
            "description": self.description,
            "features": self.features or [],
            "images": self.images or [],
            "isAvailable": self.is_available,
            "owner": self.owner.summary() if self.owner else None,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
