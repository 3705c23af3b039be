"""
Engine-wide constants for the accessibility interaction engine.

Centralizes magic numbers and attribute vocabulary to improve maintainability.
"""

# =============================================================================
# Live Region Timing (milliseconds)
# =============================================================================

# How long an announcement stays in the live region before it is cleared
ANNOUNCEMENT_CLEAR_MS = 1000

# Guardrails for a configured clear delay
ANNOUNCEMENT_CLEAR_MIN_MS = 100
ANNOUNCEMENT_CLEAR_MAX_MS = 10_000


# =============================================================================
# Identifier Generation
# =============================================================================

# Random base-36 suffix length for generated element ids
ID_SUFFIX_LENGTH = 9
ID_SUFFIX_MAX_LENGTH = 32

ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

LABEL_ID_PREFIX = "label"
DESCRIPTION_ID_PREFIX = "desc"
ERROR_ID_PREFIX = "error"


# =============================================================================
# Tab Order
# =============================================================================

# tab index of the one item reachable with Tab / Shift+Tab
TAB_INDEX_REACHABLE = 0

# tab index of items reachable only by arrow keys
TAB_INDEX_UNREACHABLE = -1


# =============================================================================
# ARIA Roles
# =============================================================================

ROLE_MENUITEM = "menuitem"
ROLE_OPTION = "option"
ROLE_STATUS = "status"
ROLE_ALERT = "alert"

PRIORITY_POLITE = "polite"
PRIORITY_ASSERTIVE = "assertive"
