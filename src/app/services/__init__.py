from .payment_gateway import PaymentGateway, PaymentGatewayError, MissingCredentialError

__all__ = [
    "PaymentGateway",
    "PaymentGatewayError",
    "MissingCredentialError",
]
