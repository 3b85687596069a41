import os

from dotenv import load_dotenv

from enums.currency import Currency
from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)

# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    _runtime_env_str = os.environ.get("RUNTIME_ENVIRONMENT")
    if not _runtime_env_str:
        raise ValueError("RUNTIME_ENVIRONMENT environment variable is not set")
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(_runtime_env_str)
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    import sys
    print(f"\n ERROR: Invalid RUNTIME_ENVIRONMENT configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_values)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('RUNTIME_ENVIRONMENT', '(not set)')}", file=sys.stderr)
    print(f"\nAdd to .env: RUNTIME_ENVIRONMENT={valid_values[0]}\n", file=sys.stderr)
    sys.exit(1)

WEBAPP_HOST = os.environ.get("WEBAPP_HOST", "0.0.0.0")
WEBAPP_PORT = int(os.environ.get("WEBAPP_PORT")) if os.environ.get("WEBAPP_PORT") else 8000

DB_NAME = os.environ.get("DB_NAME", "storefront.db")

LANGUAGE = os.environ.get("LANGUAGE", "en")  # Default to English

# Parse CURRENCY with error handling
try:
    CURRENCY = Currency(os.environ.get("CURRENCY", "USD"))
except ValueError as e:
    valid_currencies = [c.value for c in Currency]
    import sys
    print(f"\n ERROR: Invalid CURRENCY configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_currencies)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('CURRENCY', '(not set)')}", file=sys.stderr)
    print(f"\nAdd to .env: CURRENCY={valid_currencies[0]}\n", file=sys.stderr)
    sys.exit(1)

# Parse PAGE_ENTRIES with error handling
try:
    PAGE_ENTRIES = int(os.environ.get("PAGE_ENTRIES", "20"))
    if PAGE_ENTRIES <= 0:
        raise ValueError(f"PAGE_ENTRIES must be positive (got: {PAGE_ENTRIES})")
except ValueError as e:
    import sys
    print(f"\n ERROR: Invalid PAGE_ENTRIES configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Expected: Positive integer (e.g., 10, 20, 50)", file=sys.stderr)
    print(f"Current value: {os.environ.get('PAGE_ENTRIES', '(not set)')}\n", file=sys.stderr)
    sys.exit(1)

# Location service (province -> district -> ward reference data)
LOCATION_API_URL = os.environ.get("LOCATION_API_URL", "https://provinces.open-api.vn/api").rstrip("/")
LOCATION_API_TIMEOUT_SECONDS = float(os.environ.get("LOCATION_API_TIMEOUT_SECONDS", "10"))

# Address form validation
PHONE_NUMBER_PATTERN = os.environ.get("PHONE_NUMBER_PATTERN", r"^[0-9]{10}$")

# Admin dashboard
RECENT_ORDERS_LIMIT = int(os.environ.get("RECENT_ORDERS_LIMIT", "5"))

# Data Retention Configuration
DATA_RETENTION_DAYS = int(os.environ.get("DATA_RETENTION_DAYS", "30"))

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask sensitive data in logs

# Log Retention: Environment-specific defaults
# Dev: Use DATA_RETENTION_DAYS (30 days default) for debugging
# Prod: Use 5 days default to save disk space
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", str(DATA_RETENTION_DAYS)))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))

# CORS for the admin dashboard frontend
WEBAPP_CORS_ALLOWED_ORIGINS = os.environ.get("WEBAPP_CORS_ALLOWED_ORIGINS", "").split(",") if os.environ.get("WEBAPP_CORS_ALLOWED_ORIGINS") else []

# Password hashing (PBKDF2-HMAC-SHA256)
PASSWORD_HASH_ITERATIONS = int(os.environ.get("PASSWORD_HASH_ITERATIONS", "100000"))
