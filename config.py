import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./lesson_billing.db")
    DB_AUTO_CREATE = bool(data.get("DB_AUTO_CREATE", True))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Cancellation policy
    ONLINE_CANCELLATION_WINDOW_HOURS = data.get("ONLINE_CANCELLATION_WINDOW_HOURS", 24)
    OFFLINE_CANCELLATION_WINDOW_HOURS = data.get("OFFLINE_CANCELLATION_WINDOW_HOURS", 48)

    # Invoicing defaults (used when a workspace has no settings yet)
    DEFAULT_NEXT_INVOICE_NUMBER = data.get("DEFAULT_NEXT_INVOICE_NUMBER", 1000)
    DEFAULT_TAX_RATE = data.get("DEFAULT_TAX_RATE", 19)  # Percent
    DEFAULT_PAYMENT_TERMS_DAYS = data.get("DEFAULT_PAYMENT_TERMS_DAYS", 14)
    INVOICE_NUMBER_MAX_ATTEMPTS = data.get("INVOICE_NUMBER_MAX_ATTEMPTS", 5)

    # E-mail notifications (no URL = log only)
    EMAIL_API_URL = data.get("EMAIL_API_URL", None)
    EMAIL_API_KEY = data.get("EMAIL_API_KEY", "")
    EMAIL_SENDER = data.get("EMAIL_SENDER", "noreply@example.com")
    EMAIL_TIMEOUT_SECONDS = data.get("EMAIL_TIMEOUT_SECONDS", 10.0)

    # Monthly invoicing job
    MONTHLY_INVOICING_ENABLED = bool(data.get("MONTHLY_INVOICING_ENABLED", True))
    MONTHLY_INVOICING_RUN_DAY = data.get("MONTHLY_INVOICING_RUN_DAY", 1)  # Day of month to run
    MONTHLY_INVOICING_CHECK_INTERVAL_SECONDS = data.get("MONTHLY_INVOICING_CHECK_INTERVAL_SECONDS", 86400)

    # Bookkeeping export
    EXPORT_REVENUE_ACCOUNT = data.get("EXPORT_REVENUE_ACCOUNT", "8400")
    EXPORT_DEBTOR_ACCOUNT = data.get("EXPORT_DEBTOR_ACCOUNT", "10000")
