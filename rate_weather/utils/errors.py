"""Custom exception classes for Rate Weather."""


class RateWeatherError(Exception):
    """Base exception for all Rate Weather errors."""
    pass


class ConfigurationError(RateWeatherError):
    """Raised when there's a configuration error."""
    pass


class ValidationError(RateWeatherError):
    """Raised when data validation fails."""
    pass


class DataProviderError(RateWeatherError):
    """Base exception for data provider errors."""
    pass


class FetchError(DataProviderError):
    """Raised when the rate provider returns a bad status or an unusable payload."""
    pass


class MalformedDataError(DataProviderError):
    """Raised when a single historical entry does not have the expected shape."""
    pass


class CacheError(RateWeatherError):
    """Raised when cache storage operations fail."""
    pass
