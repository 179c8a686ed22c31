"""FastAPI application factory"""

import logging
import time
from collections import Counter
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.adapter.repositories.invoice_repository import JsonFileInvoiceRepository
from src.adapter.services.paystack_gateway import PaystackGateway, is_valid_secret_key
from src.api.error import (
    ClientError,
    client_error_handler,
    http_error_handler,
    validation_error_handler,
)
from src.api.routes import invoices, payments, webhooks
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    config,
    invoice_repository: Optional[InvoiceRepository] = None,
    payment_gateway: Optional[PaymentGateway] = None,
) -> FastAPI:
    """
    Build the API application

    Args:
        config: ApplicationConfig-like object
        invoice_repository: Store to use (defaults to the JSON file store at INVOICE_STORE_PATH)
        payment_gateway: Gateway to use (defaults to Paystack with PAYSTACK_SECRET_KEY)
    """
    configure_logging(config.LOG_LEVEL)

    if not is_valid_secret_key(config.PAYSTACK_SECRET_KEY):
        logger.warning(
            "PAYSTACK_SECRET_KEY is not set or invalid. Set it in env.yaml or the environment "
            "(sk_test_... in development); payment calls will fail until it is."
        )

    app = FastAPI(title=config.SERVICE_NAME)

    # Constructed once; routes receive them through src.depends
    app.state.config = config
    app.state.invoice_repository = invoice_repository or JsonFileInvoiceRepository(
        config.INVOICE_STORE_PATH
    )
    app.state.payment_gateway = payment_gateway or PaystackGateway(
        config.PAYSTACK_SECRET_KEY,
        base_url=config.PAYSTACK_BASE_URL,
        timeout=config.PAYSTACK_TIMEOUT_SECONDS,
    )
    app.state.webhook_outcomes = Counter()

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        request_logger = logging.getLogger("src.api.access")

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            request_logger.info(
                f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms"
            )
            return response

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    @app.get("/health", tags=["Health"])
    async def health():
        return {
            "ok": True,
            "service": config.SERVICE_NAME,
            "storage": app.state.invoice_repository.storage_mode.value,
            "webhooks": dict(app.state.webhook_outcomes),
        }

    app.include_router(invoices.router, prefix=config.API_PREFIX)
    app.include_router(payments.router, prefix=config.API_PREFIX)
    app.include_router(webhooks.router, prefix=config.API_PREFIX)

    return app
