"""
Exception types raised by the country and travel-info clients and by the
session controller.

Each error carries a short user-facing ``message``; the underlying cause is
logged where it happens and never copied into the message. ``status_code``
is the HTTP status the API answers with when the error reaches a route.
"""


class CountryFinderError(Exception):
    """Root application error."""
    status_code = 500
    description = "Application error"

    def __init__(self, message=None, details=None):
        super().__init__(message or self.description)
        self.message = message or self.description
        self.details = details or {}

    def to_dict(self):
        return {
            "status": "error",
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# ==============================================================================
# Country data API
# ==============================================================================

class ConnectivityError(CountryFinderError):
    status_code = 503
    description = (
        "Could not connect to the country database. "
        "Please check your internet connection."
    )


class FetchError(CountryFinderError):
    status_code = 502

    def __init__(self, upstream_status, reason):
        self.upstream_status = upstream_status
        self.upstream_reason = reason
        super().__init__(
            f"Failed to fetch countries: {upstream_status} {reason}",
            details={"upstream_status": upstream_status, "reason": reason},
        )


class SearchError(CountryFinderError):
    status_code = 502
    description = "There was an issue with the search. Please try again."

    def __init__(self, upstream_status=None, reason=""):
        self.upstream_status = upstream_status
        self.upstream_reason = reason
        super().__init__(
            details={"upstream_status": upstream_status, "reason": reason},
        )


# ==============================================================================
# Travel info generation
# ==============================================================================

class GenerationError(CountryFinderError):
    status_code = 502

    def __init__(self, country_name):
        self.country_name = country_name
        super().__init__(
            f"Could not generate travel information for {country_name}. "
            "Please try again later.",
            details={"country": country_name},
        )


# ==============================================================================
# Session
# ==============================================================================

class CountryNotFoundError(CountryFinderError):
    status_code = 404
    description = "Country not found"


class CountriesNotLoadedError(CountryFinderError):
    status_code = 409
    description = "The country list has not been loaded yet"
