# Utility modules for request validation
from .validation import (
    parse_number, parse_user_id, parse_plan_date,
    parse_targets, parse_profile
)
