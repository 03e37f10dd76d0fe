from .models import DEFAULT_PROFILE, PrinterProfile, PrinterProfileRegistry

__all__ = ["DEFAULT_PROFILE", "PrinterProfile", "PrinterProfileRegistry"]
