"""Servicios de orquestación del Core."""

from core.services.destination_call import call_destination, validate_call_options

__all__ = ["call_destination", "validate_call_options"]
