from fastapi import Request
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.payment_gateway import PaymentGateway


def get_config(request: Request):
    return request.app.state.config


def get_invoice_repository(request: Request) -> InvoiceRepository:
    return request.app.state.invoice_repository


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway
