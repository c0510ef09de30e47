"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_SESSION_DAYS = 7
DEFAULT_LIST_LIMIT = 200
DEFAULT_FEED_LIMIT = 5

MIN_PASSWORD_LENGTH = 6

DEFAULT_TIME_IN = time(9, 0)
DEFAULT_TIME_OUT = time(18, 0)
DEFAULT_DAYS_OF_WORK = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

LATE_GRACE_MINUTES = 15

MIN_SCORE = 1
MAX_SCORE = 5

# Amount columns are DECIMAL(12,2).
MONEY_LIMIT = Decimal("10000000000")

TOKEN_SALT_VERIFY = "verify-email"
TOKEN_SALT_RESET = "reset-password"
DEFAULT_TOKEN_MAX_AGE_SECONDS = 24 * 60 * 60

POSITIONS = (
    "Software Engineer",
    "Senior Software Engineer",
    "Product Manager",
    "Designer",
    "HR Specialist",
    "HR Manager",
    "Accountant",
    "Sales Representative",
    "Marketing Specialist",
    "Customer Support",
    "Administrative Assistant",
    "Other",
)

DEPARTMENTS = (
    "Engineering",
    "Product",
    "Design",
    "Human Resources",
    "Finance",
    "Sales",
    "Marketing",
    "Operations",
    "Customer Support",
)
