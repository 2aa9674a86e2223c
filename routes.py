"""
HTTP Routes

Thin JSON layer over the planning services. Authentication happens upstream;
the authenticated user id arrives in a request header.
"""

from datetime import date

from flask import Blueprint, current_app, jsonify, request

from services import derive_targets, fetch_plan, generate_plan
from services.errors import PlannerError, ValidationError
from utils import parse_plan_date, parse_profile, parse_targets, parse_user_id

api = Blueprint('api', __name__, url_prefix='/api')
health = Blueprint('health', __name__)


class Unauthorized(PlannerError):
    status_code = 401


def current_user_id():
    raw = request.headers.get(current_app.config['USER_ID_HEADER'])
    if not raw:
        raise Unauthorized('Unauthorized')
    try:
        return parse_user_id(raw)
    except PlannerError:
        raise Unauthorized('Unauthorized')


def _json_body(message='Invalid input data'):
    """Request JSON as a dict; an absent body counts as empty."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError(message)
    return payload


# ============================================
# ROUTES - HEALTH
# ============================================

@health.get('/health')
def health_check():
    return jsonify({'status': 'ok'})


# ============================================
# ROUTES - NUTRITION TARGETS
# ============================================

@api.post('/nutrition/calculate')
def calculate_nutrition():
    profile = parse_profile(_json_body())
    result = derive_targets(profile)
    return jsonify({'success': True, 'data': result.to_dict()})


# ============================================
# ROUTES - MEAL PLANS
# ============================================

@api.post('/meals/generate')
def generate_meal_plan():
    user_id = current_user_id()
    payload = _json_body('Valid macro targets are required')

    # Default to today when the client does not send a date
    raw_date = payload.get('planDate')
    plan_date = parse_plan_date(raw_date) if raw_date is not None else date.today()
    targets = parse_targets(payload)

    plan = generate_plan(user_id, plan_date, targets)
    return jsonify({'success': True, 'data': plan.to_dict()}), 201


@api.get('/meals/<plan_date>')
def get_meal_plan(plan_date):
    user_id = current_user_id()
    plan = fetch_plan(user_id, parse_plan_date(plan_date))
    return jsonify({'success': True, 'data': plan.to_dict()})
