from .base import ProviderBase
from .company_lookup import CompanyLookupProvider, LookupTracker
from .models import CompanyProfile, LookupResponse, LookupResult

__all__ = [
    "ProviderBase",
    "CompanyLookupProvider",
    "LookupTracker",
    "CompanyProfile",
    "LookupResponse",
    "LookupResult",
]
