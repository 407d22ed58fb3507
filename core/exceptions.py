# core/exceptions.py
"""
Custom exceptions for the backend
"""

class KrishiMitraError(Exception):
    """Base exception for KrishiMitra backend"""
    pass

class AgentError(KrishiMitraError):
    """Agent-related errors"""
    pass

class AgentConfigError(KrishiMitraError):
    """Agent configuration errors"""
    pass

class ExternalAPIError(KrishiMitraError):
    """External API errors"""
    pass

class WeatherDataError(ExternalAPIError):
    """Weather observation could not be obtained"""
    pass

class AdvisorError(ExternalAPIError):
    """Generative AI advisor failed or is not configured"""
    pass

class CacheError(KrishiMitraError):
    """Cache-related errors"""
    pass
