"""
FastAPI dependency providers.

Stores and the resolver are built once in ``create_app`` and kept on
``app.state``; routers only ever receive them through these functions.
"""

from fastapi import Request

from hany_realty.services.map_resolver import MapUrlResolver
from hany_realty.stores.contact_store import ContactInfoStore
from hany_realty.stores.listing_store import ListingStore
from hany_realty.stores.user_store import UserStore


def get_listing_store(request: Request) -> ListingStore:
    return request.app.state.listing_store


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_contact_store(request: Request) -> ContactInfoStore:
    return request.app.state.contact_store


def get_map_resolver(request: Request) -> MapUrlResolver:
    return request.app.state.map_resolver
