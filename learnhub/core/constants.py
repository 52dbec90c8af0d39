"""Application-wide constants.

Field limits shared by models and request schemas, and list sizes used by
the instructor dashboard. For environment-specific configuration, see
config.py.
"""

# =============================================================================
# Course Limits
# =============================================================================

COURSE_TITLE_MAX_LENGTH: int = 100
COURSE_DESCRIPTION_MAX_LENGTH: int = 1000

# =============================================================================
# Content Limits
# =============================================================================

CONTENT_TITLE_MAX_LENGTH: int = 200
CONTENT_DESCRIPTION_MAX_LENGTH: int = 500

# =============================================================================
# Pricing
# =============================================================================

# Prices and amounts paid are stored with two decimal places
PRICE_PRECISION: int = 10
PRICE_SCALE: int = 2

# =============================================================================
# Dashboard
# =============================================================================

# Number of subscriptions shown in the "recent" list
RECENT_SUBSCRIPTIONS_LIMIT: int = 10
