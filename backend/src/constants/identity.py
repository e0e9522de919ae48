# Provider error codes -> user-facing messages
ERROR_MESSAGES = {
    "invalid_credentials": "Incorrect email or password.",
    "invalid_grant": "Incorrect email or password.",
    "email_exists": "This email is already registered. Try signing in.",
    "user_already_exists": "This email is already registered. Try signing in.",
    "weak_password": "Password must be at least 6 characters.",
    "email_address_invalid": "Invalid email.",
    "validation_failed": "Invalid email.",
    "email_not_confirmed": "Email not confirmed yet. Check your inbox.",
    "over_request_rate_limit": "Too many attempts. Wait a moment and try again.",
    "over_email_send_rate_limit": "Too many attempts. Wait a moment and try again.",
    "same_password": "New password must be different from the current one.",
    "session_not_found": "Session expired. Sign in again.",
    "session_expired": "Session expired. Sign in again.",
    "refresh_token_not_found": "Invalid session. Sign in again.",
    "bad_jwt": "Session expired. Sign in again.",
    "no_authorization": "Authorization token required.",
    "user_not_found": "User not found.",
    "network_error": "Network error. Check your connection.",
}

DEFAULT_ERROR_MESSAGE = "Unexpected authentication error."

ALREADY_REGISTERED_CODES = {"email_exists", "user_already_exists"}

# Local validation codes, reported through the same table
ERROR_MESSAGES.update({
    "password_mismatch": "Passwords do not match.",
})
