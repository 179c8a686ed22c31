from .paystack_gateway import PaystackGateway

__all__ = [
    "PaystackGateway",
]
