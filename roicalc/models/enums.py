from enum import Enum


class DriverId(str, Enum):
    REVENUE = "revenue"
    EFFICIENCY = "efficiency"
    RISK = "risk"
    CX = "cx"
    DONATIONS = "donations"
    TCO = "tco"


class CXVariant(str, Enum):
    SIMPLE = "simple"
    DAMPENED = "dampened"


class CostModel(str, Enum):
    STANDARD = "standard"
    TCO = "tco"


class ParameterGroup(str, Enum):
    TRAFFIC = "traffic"
    OPERATIONAL = "operational"
    RISK = "risk"
    EXPERIENCE = "experience"
    DONATIONS = "donations"
    IMPROVEMENT = "improvement"
    INVESTMENT = "investment"
    TCO = "tco"


class Currency(str, Enum):
    USD = "USD"
    AUD = "AUD"
    NZD = "NZD"
    EUR = "EUR"
    GBP = "GBP"


class LookupStatus(str, Enum):
    FOUND = "found"
    NO_DATA = "no_data"
    STALE = "stale"


class LookupKind(str, Enum):
    COMPANY_NAME = "companyName"
    DOMAIN = "domain"


VALID_HORIZONS = (3, 5)
