"""Decide whether a lookup query is a company name or a web domain."""

from __future__ import annotations

from roicalc.models.enums import LookupKind


def classify_query(query: str) -> LookupKind:
    """DOMAIN when the query contains a "." and no space, else COMPANY_NAME.

    >>> classify_query("acme.com")
    <LookupKind.DOMAIN: 'domain'>
    >>> classify_query("Acme Inc.")
    <LookupKind.COMPANY_NAME: 'companyName'>
    """
    text = query.strip()
    if "." in text and " " not in text:
        return LookupKind.DOMAIN
    return LookupKind.COMPANY_NAME


def build_lookup_request(query: str) -> dict[str, str]:
    """Request body for the company lookup service."""
    text = query.strip()
    if not text:
        raise ValueError("Lookup query cannot be empty")
    return {classify_query(text).value: text}
