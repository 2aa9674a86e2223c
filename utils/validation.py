"""
Request Validation Module

Turns untrusted request payloads into validated records before they reach
the target deriver or the allocator. Every failure raises ValidationError
naming the offending field.
"""

import math
from datetime import date, datetime, timezone

from constants import VALID_SEXES, VALID_ACTIVITY_LEVELS, VALID_GOALS, FIELD_ALIASES, VALUE_ALIASES
from constants.validation import PROFILE_BOUNDS
from services.errors import ValidationError
from services.records import MacroTarget, Profile


def parse_number(value, field, min_val=None, max_val=None, positive=False):
    """
    Parse a numeric field, rejecting missing, boolean and non-finite values.

    Args:
        value: Raw value (number or numeric string)
        field: Field name used in the error message
        min_val / max_val: Optional inclusive bounds
        positive: Require value > 0

    Returns:
        float
    """
    if value is None or value == '' or isinstance(value, bool):
        raise ValidationError(f'{field} is required', field=field)
    try:
        result = float(value)
    except (ValueError, TypeError):
        raise ValidationError(f'{field} must be a number', field=field)
    if not math.isfinite(result):
        raise ValidationError(f'{field} must be a number', field=field)
    if positive and result <= 0:
        raise ValidationError(f'{field} must be greater than zero', field=field)
    if min_val is not None and result < min_val:
        raise ValidationError(f'{field} must be at least {min_val}', field=field)
    if max_val is not None and result > max_val:
        raise ValidationError(f'{field} must be at most {max_val}', field=field)
    return result


def parse_user_id(value):
    """User ids are positive integers supplied by the auth layer."""
    try:
        user_id = int(str(value).strip())
    except (ValueError, TypeError):
        raise ValidationError('Invalid user id', field='userId')
    if user_id <= 0:
        raise ValidationError('Invalid user id', field='userId')
    return user_id


def _utc_date(value):
    """Calendar date of a datetime; ones with an offset resolve in UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def parse_plan_date(value):
    """
    Parse an ISO calendar date ('2024-01-01'). Full ISO timestamps are
    accepted and truncated to their date, converted to UTC first when they
    carry an offset.
    """
    if isinstance(value, datetime):
        return _utc_date(value)
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValidationError('planDate is required', field='planDate')

    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        raise ValidationError('Invalid planDate', field='planDate')
    return _utc_date(parsed)


def parse_targets(payload):
    """
    Build a MacroTarget from targetKcal/targetProtein/targetCarbs/targetFats.
    All four are required and must be greater than zero.
    """
    if not isinstance(payload, dict):
        raise ValidationError('Valid macro targets are required')
    return MacroTarget(
        kcal=parse_number(payload.get('targetKcal'), 'targetKcal', positive=True),
        protein=parse_number(payload.get('targetProtein'), 'targetProtein', positive=True),
        carbs=parse_number(payload.get('targetCarbs'), 'targetCarbs', positive=True),
        fats=parse_number(payload.get('targetFats'), 'targetFats', positive=True),
    )


def _choice(value, field, valid):
    if not value or not isinstance(value, str):
        raise ValidationError(f'{field} is required', field=field)
    normalized = value.strip().lower()
    normalized = VALUE_ALIASES.get(normalized, normalized)
    if normalized not in valid:
        raise ValidationError(
            f'{field} must be one of: {", ".join(sorted(valid))}', field=field
        )
    return normalized


def parse_profile(payload):
    """Validate biometric fields for target derivation and return a Profile."""
    if not isinstance(payload, dict):
        raise ValidationError('Invalid input data')

    data = dict(payload)
    for alias, canonical in FIELD_ALIASES.items():
        if alias in data and canonical not in data:
            data[canonical] = data[alias]

    age_min, age_max = PROFILE_BOUNDS['age']
    height_min, height_max = PROFILE_BOUNDS['height']
    weight_min, weight_max = PROFILE_BOUNDS['weight']

    return Profile(
        age=parse_number(data.get('age'), 'age', min_val=age_min, max_val=age_max),
        sex=_choice(data.get('sex'), 'sex', VALID_SEXES),
        height=parse_number(data.get('height'), 'height', min_val=height_min, max_val=height_max),
        weight=parse_number(data.get('weight'), 'weight', min_val=weight_min, max_val=weight_max),
        activity_level=_choice(data.get('activityLevel'), 'activityLevel', VALID_ACTIVITY_LEVELS),
        goal=_choice(data.get('goal'), 'goal', VALID_GOALS),
    )
