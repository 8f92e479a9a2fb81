"""Registry for account menu identifiers, catalogs and ordering constants."""
from __future__ import annotations

CUSTOM_KEY_PREFIX = "custom-"

DEFAULT_ORDER = 999

CUSTOM_ORDER_START = 0
CUSTOM_ORDER_STEP = 10

# Counters used for native entries that are merged without an order hint.
NATIVE_B_ORDER_START = 50
NATIVE_B_ORDER_STEP = 10
NATIVE_A_CROSS_ORDER_START = 10
NATIVE_A_CROSS_ORDER_STEP = 10

DEFAULT_ADMINISTRATOR_ROLE = "administrator"

VENDOR_PROFILE_ROUTE = "vendor_view_page"

ROUTE_CATALOG: dict[str, str] = {
    "user_account_page": "User Account",
    "user_edit_settings_page": "Edit Settings",
    "user_logout_page": "Log Out",
    VENDOR_PROFILE_ROUTE: "Vendor Profile",
    "listings_edit_page": "Edit Listings",
    "listings_favorite_page": "Favorite Listings",
}

B_ENDPOINT_CATALOG: dict[str, str] = {
    "dashboard": "Dashboard",
    "orders": "Orders",
    "subscriptions": "Subscriptions",
    "downloads": "Downloads",
    "edit-address": "Addresses",
    "payment-methods": "Payment Methods",
    "edit-account": "Account Details",
    "customer-logout": "Logout",
}
