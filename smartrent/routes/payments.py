# smartrent/routes/payments.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..security import current_caller
from ..services import payments as service
from ..services.reports import payment_stats

bp = Blueprint("payments", __name__)


@bp.get("/payments")
@jwt_required()
def list_payments():
    items = service.list_for_caller(current_caller())
    return jsonify({"success": True, "payments": [p.serialize() for p in items]}), 200


@bp.post("/payments")
@jwt_required()
def record_payment():
    data = request.get_json(silent=True) or {}
    payment = service.record_payment(current_caller(), data)
    return jsonify({
        "success": True,
        "message": "Payment recorded successfully",
        "payment": payment.serialize(),
    }), 201


@bp.get("/payments/stats")
@jwt_required()
def stats():
    """Revenue for the current month and year plus the method breakdown"""
    return jsonify({"success": True, "stats": payment_stats(current_caller())}), 200
