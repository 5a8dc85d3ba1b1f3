"""
Global constants for the profkit CLI.
"""

# Command group actions
LOGIN_ACTION = "login"
LOGOUT_ACTION = "logout"

# Legacy (v1) profile layout
PROFILE_EXTENSION = ".yaml"
META_FILE_SUFFIX = "_meta"

# Prefix written into v1 profile files in place of a secret value
PROFILES_OPTION_SECURELY_STORED = "managed by"

# Base profile type used by the built-in profile declarations
BASE_PROFILE_TYPE = "base"

# v2 config document
CONFIG_FILE_NAME = "profkit.config.json"

# Credential vault service name
VAULT_SERVICE_NAME = "profkit"

# HTTP Headers
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "X-CSRF-ZOSMF-HEADER": "true",
}

# Logging constants
LOG_FILE_NAME = "profkit"
LOG_RETENTION_DAYS = 7

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "pass", "token", "tokenvalue", "token_value", "token-value",
    "secret", "authorization", "cookie", "api_key", "bearer", "session",
)
