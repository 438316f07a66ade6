from .user import User
from .property import Property
from .tenant import Tenant
from .payment import Payment
from .maintenance import Maintenance

__all__ = ["User", "Property", "Tenant", "Payment", "Maintenance"]
