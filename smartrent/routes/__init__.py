from .maintenance import bp as maintenance_bp
from .payments import bp as payments_bp
from .properties import bp as properties_bp
from .tenants import bp as tenants_bp

__all__ = ["properties_bp", "tenants_bp", "payments_bp", "maintenance_bp"]
