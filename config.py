import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()

# Serverless hosts only allow writes under /tmp
IS_SERVERLESS = any(
    os.environ.get(name) for name in ("VERCEL", "AWS_LAMBDA_FUNCTION_NAME", "NOW_REGION")
)
DEFAULT_STORE_PATH = (
    "/tmp/invoices.json" if IS_SERVERLESS else os.path.join(ROOT_PATH, "data", "invoices.json")
)


class ApplicationConfig:
    SERVICE_NAME = data.get("SERVICE_NAME", "paystack-lottery-api")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 4000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    APP_URL = data.get("APP_URL", f"http://localhost:{API_PORT}")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Paystack
    PAYSTACK_SECRET_KEY = data.get("PAYSTACK_SECRET_KEY") or os.environ.get("PAYSTACK_SECRET_KEY", "")
    PAYSTACK_BASE_URL = data.get("PAYSTACK_BASE_URL", "https://api.paystack.co")
    PAYSTACK_TIMEOUT_SECONDS = data.get("PAYSTACK_TIMEOUT_SECONDS", 30.0)

    # Invoices
    INVOICE_STORE_PATH = data.get("INVOICE_STORE_PATH", DEFAULT_STORE_PATH)
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "KES")
    DEFAULT_INVOICE_DESCRIPTION = data.get("DEFAULT_INVOICE_DESCRIPTION", "Lottery purchase")

    # Mobile money (M-Pesa via the Paystack charge API)
    MSISDN_COUNTRY_CODE = str(data.get("MSISDN_COUNTRY_CODE", "254"))
    MOBILE_MONEY_PROVIDER = data.get("MOBILE_MONEY_PROVIDER", "mpesa")
