"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_PAGE_SIZE = 10
DEFAULT_TOP_PAID = 10

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
POSITION_MAX_LENGTH = 100

MIN_SALARY = Decimal("20000.00")
MAX_SALARY = Decimal("500000.00")
