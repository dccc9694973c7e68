class ShopError(Exception):
    """Base class for storefront errors."""


class MalformedPersistedData(ShopError, ValueError):
    """
    A persisted cart or wishlist entry could not be parsed.
    Hydration skips the entry; it is never shown to the user.
    """


class StorageUnavailable(ShopError):
    """
    Durable storage could not be read or written.
    Persistence is best-effort, so callers log this and carry on.
    """
