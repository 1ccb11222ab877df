"""
Service facades over the request helper, one per API resource.
"""

from .restful_api_service import RestfulApiService

__all__ = ["RestfulApiService"]
