"""User-facing message catalogue.

Field-level and business-rule messages are Bengali by default; generic,
method and database errors stay English in every locale.
"""
from .config import get_settings

DEFAULT_LOCALE = "bn"

_COMMON = {
    "invalid_action": "Invalid action",
    "invalid_method": "Invalid request method",
    "invalid_body": "Invalid request body",
    "database_error": "Database error",
    "session_active": "Session active",
    "no_session": "No active session",
}

CATALOGUE: dict[str, dict[str, str]] = {
    "bn": {
        **_COMMON,
        "login_fields_required": "সকল ফিল্ড পূরণ করুন",
        "account_inactive": "আপনার একাউন্টটি নিষ্ক্রিয় রয়েছে",
        "bad_credentials": "মোবাইল নম্বর অথবা পাসওয়ার্ড ভুল",
        "login_success": "লগইন সফল হয়েছে",
        "register_fields_required": "সকল আবশ্যক ফিল্ড পূরণ করুন",
        "invalid_mobile": "সঠিক মোবাইল নম্বর দিন",
        "short_password": "পাসওয়ার্ড কমপক্ষে ৬ অক্ষরের হতে হবে",
        "duplicate_mobile": "এই মোবাইল নম্বর দিয়ে ইতিমধ্যে একাউন্ট আছে",
        "register_success": "একাউন্ট তৈরি সফল হয়েছে",
        "register_failed": "একাউন্ট তৈরি করা যায়নি",
        "logout_success": "লগআউট সফল হয়েছে",
    },
    "en": {
        **_COMMON,
        "login_fields_required": "Please fill in all fields",
        "account_inactive": "Your account is inactive",
        "bad_credentials": "Incorrect mobile number or password",
        "login_success": "Login successful",
        "register_fields_required": "Please fill in all required fields",
        "invalid_mobile": "Enter a valid mobile number",
        "short_password": "Password must be at least 6 characters",
        "duplicate_mobile": "An account with this mobile number already exists",
        "register_success": "Account created successfully",
        "register_failed": "Could not create account",
        "logout_success": "Logged out successfully",
    },
}


def message(key: str, locale: str | None = None) -> str:
    """Look up ``key`` in the requested locale, falling back to Bengali."""

    table = CATALOGUE.get(locale or get_settings().locale, CATALOGUE[DEFAULT_LOCALE])
    return table[key]
