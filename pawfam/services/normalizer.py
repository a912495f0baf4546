"""
Response Normalizer

The backend does not return lists in one consistent shape: some endpoints
answer with a bare array, others wrap it under "data", "applications",
"orders" and so on. Entities also use alternate field names. Everything here
accepts the loose shapes, returns one canonical shape, and falls back to a
fixed default instead of raising.
"""

import logging
import math
import uuid
from collections.abc import Mapping
from typing import Any, Callable, Optional, Sequence
from urllib.parse import quote

from ..models.adoption import PetListing
from ..models.cart import Product

logger = logging.getLogger(__name__)

DEFAULT_ARRAY_KEYS = ("data", "results", "items", "applications", "orders", "bookings", "docs")

DEFAULT_RATING = 4.5
DEFAULT_CATEGORY = "accessories"

PRODUCT_PLACEHOLDER = "https://placehold.co/300x200/3b82f6/ffffff?text={name}"
PET_PLACEHOLDER = "https://placehold.co/300x300/f59e0b/ffffff?text={name}"


def _as_list(raw: Any) -> Optional[list]:
    return raw if isinstance(raw, list) else None


def _from_known_keys(raw: Any, keys: Sequence[str]) -> Optional[list]:
    if not isinstance(raw, Mapping):
        return None
    for key in keys:
        if isinstance(raw.get(key), list):
            return raw[key]
    return None


def _from_any_key(raw: Any) -> Optional[list]:
    if not isinstance(raw, Mapping):
        return None
    for value in raw.values():
        if isinstance(value, list):
            return value
    return None


def normalize_list(raw: Any, known_array_keys: Sequence[str] = DEFAULT_ARRAY_KEYS) -> list:
    """
    Extract the list carried by a backend response.

    Shapes are tried in priority order: a bare list, a mapping with one of
    the known array keys, a mapping with any list-valued property. Anything
    else yields an empty list.
    """
    decoders: list[Callable[[Any], Optional[list]]] = [
        _as_list,
        lambda value: _from_known_keys(value, known_array_keys),
        _from_any_key,
    ]
    for decode in decoders:
        result = decode(raw)
        if result is not None:
            return result

    if raw is not None:
        logger.debug(f"No list found in response of type {type(raw).__name__}")
    return []


def _number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _text(*candidates: Any, default: str = "") -> str:
    """First truthy candidate as a string"""
    for candidate in candidates:
        if candidate:
            return str(candidate)
    return default


def _first_image(raw: Mapping) -> Optional[str]:
    images = raw.get("images")
    if isinstance(images, list) and images and images[0]:
        return str(images[0])
    return _text(raw.get("image")) or None


def _entity_id(raw: Mapping, name: str) -> str:
    identifier = raw.get("_id") or raw.get("id")
    if identifier:
        return str(identifier)
    # Stable stand-in so the same entry keeps the same cart identity
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"pawfam:{name}"))


def placeholder_image(template: str, name: str) -> str:
    return template.format(name=quote(name))


def display_rating(rating: Any) -> float:
    """Rating to show; missing or non-positive ratings display as 4.5"""
    value = _number(rating)
    return value if value > 0 else DEFAULT_RATING


def normalize_product(raw: Mapping) -> Product:
    """Vendor accessory post -> catalog product"""
    name = _text(raw.get("name"), raw.get("title"), default="Untitled Product")
    return Product(
        id=_entity_id(raw, name),
        name=name,
        category=_text(raw.get("category"), default=DEFAULT_CATEGORY),
        price=max(_number(raw.get("price") or raw.get("cost") or 0), 0.0),
        rating=_number(raw.get("rating") or 0),
        image=_first_image(raw) or placeholder_image(PRODUCT_PLACEHOLDER, name),
        description=_text(raw.get("description"), raw.get("details")),
    )


def normalize_products(raw: Any) -> list[Product]:
    return [normalize_product(item) for item in normalize_list(raw) if isinstance(item, Mapping)]


def shelter_name(value: Any, default: str = "Vendor") -> str:
    """Flatten a shelter given as a string or as an object"""
    if not value:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return _text(
            value.get("name"),
            value.get("location"),
            value.get("address"),
            value.get("vendorName"),
            default=default,
        )
    return str(value)


def normalize_pet(raw: Mapping) -> PetListing:
    """Vendor adoption post -> adoptable pet listing"""
    name = _text(raw.get("name"), raw.get("title"), default="Unnamed Pet")
    vendor = raw.get("vendor")
    shelter = raw.get("shelter") or raw.get("vendorName")
    if not shelter and isinstance(vendor, Mapping):
        shelter = vendor.get("name") or vendor.get("vendorName")

    return PetListing(
        id=_entity_id(raw, name),
        name=name,
        type=_text(raw.get("type"), raw.get("animalType"), default="Pet"),
        breed=_text(raw.get("breed"), raw.get("breedName")),
        age=_text(raw.get("age"), raw.get("ageInfo")),
        gender=_text(raw.get("gender")),
        size=_text(raw.get("size")),
        description=_text(raw.get("description"), raw.get("details")),
        image=_first_image(raw) or placeholder_image(PET_PLACEHOLDER, name),
        status=_text(raw.get("status"), default="Available"),
        shelter=shelter_name(shelter),
    )


def normalize_pets(raw: Any) -> list[PetListing]:
    return [normalize_pet(item) for item in normalize_list(raw) if isinstance(item, Mapping)]


def normalize_profile(raw: Any) -> dict:
    """Profile responses come as {"profile": {...}} or as the bare record"""
    if not isinstance(raw, Mapping):
        return {}
    profile = raw.get("profile")
    if isinstance(profile, Mapping):
        return dict(profile)
    return dict(raw)
