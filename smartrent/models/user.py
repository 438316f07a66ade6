from ..extensions import db
from ..utils import isoformat, utcnow

ROLES = ("owner", "tenant")


class User(db.Model):
    __tablename__ = "user"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    phone = db.Column(db.String(50))
    role = db.Column(db.String(20), nullable=False, default="tenant")  # owner | tenant
    created_at = db.Column(db.DateTime, default=utcnow)

    def summary(self):
        return {"id": self.id, "name": self.name, "email": self.email, "phone": self.phone}

    def serialize(self):
        d = self.summary()
        d.update({"role": self.role, "createdAt": isoformat(self.created_at)})
        return d

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
