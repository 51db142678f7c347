import threading
from collections.abc import Callable, Mapping
from typing import Optional

from mypy_extensions import mypyc_attr

from sqlbulk.dialects._types import VendorProfile
from sqlbulk.dialects.profiles import BUILTIN_PROFILE_FACTORIES
from sqlbulk.exceptions import ImproperConfigurationError, UnsupportedVendorError
from sqlbulk.utils.logging import get_logger

__all__ = ("VendorProfileRegistry", "get_default_registry", "get_vendor_profile")

logger = get_logger("dialects")

ProfileFactory = Callable[[], VendorProfile]


@mypyc_attr(allow_interpreted_subclasses=False)
class VendorProfileRegistry:
    """Populate-once cache of vendor profiles.

    Reads of cached profiles take no lock. The first request for a vendor id computes
    the profile under a lock and publishes it; concurrent first requests for the same
    id observe the single published profile. Profiles are never evicted.

    Args:
        factories: Vendor id to profile factory mapping. Defaults to the built-in
            vendors.
    """

    __slots__ = ("_factories", "_lock", "_profiles")

    def __init__(self, factories: "Optional[Mapping[str, ProfileFactory]]" = None) -> None:
        self._factories: dict[str, ProfileFactory] = dict(
            BUILTIN_PROFILE_FACTORIES if factories is None else factories
        )
        self._profiles: dict[str, VendorProfile] = {}
        self._lock = threading.Lock()

    def profile(self, vendor_id: str) -> VendorProfile:
        """Return the profile for ``vendor_id``, computing it on first use.

        Args:
            vendor_id: Vendor identifier.

        Raises:
            UnsupportedVendorError: No factory is registered for the vendor id.

        Returns:
            The cached vendor profile.
        """
        cached = self._profiles.get(vendor_id)
        if cached is not None:
            return cached

        with self._lock:
            cached = self._profiles.get(vendor_id)
            if cached is not None:
                return cached
            factory = self._factories.get(vendor_id)
            if factory is None:
                raise UnsupportedVendorError(vendor_id, sorted(self._factories))
            profile = factory()
            if profile.vendor_id != vendor_id:
                msg = f"Profile factory for {vendor_id!r} produced a profile for {profile.vendor_id!r}"
                raise ImproperConfigurationError(msg)
            self._profiles[vendor_id] = profile

        logger.debug("Populated vendor profile %s", vendor_id)
        return profile

    def register(self, vendor_id: str, factory: ProfileFactory) -> None:
        """Register a profile factory for an additional vendor.

        Args:
            vendor_id: Vendor identifier.
            factory: Callable producing the vendor profile.

        Raises:
            ImproperConfigurationError: The vendor id is already registered.
        """
        with self._lock:
            if vendor_id in self._factories:
                msg = f"Vendor {vendor_id!r} is already registered"
                raise ImproperConfigurationError(msg)
            self._factories[vendor_id] = factory

    def is_supported(self, vendor_id: str) -> bool:
        """Return whether a profile can be produced for ``vendor_id``."""
        return vendor_id in self._factories

    def list_vendors(self) -> "list[str]":
        """Return registered vendor ids."""
        return sorted(self._factories)


_default_registry: Optional[VendorProfileRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> VendorProfileRegistry:
    """Return the process-wide registry of built-in vendor profiles."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = VendorProfileRegistry()
    return _default_registry


def get_vendor_profile(vendor_id: str) -> VendorProfile:
    """Return a profile from the process-wide registry.

    Args:
        vendor_id: Vendor identifier.

    Returns:
        The cached vendor profile.
    """
    return get_default_registry().profile(vendor_id)
