"""
TA Engine Services

Service layer containing the analysis logic.
Each service has a defined interface (contract) and implementation.
"""

from ta_engine.services.base import BaseService, ServiceError, MalformedInputError

__all__ = ["BaseService", "ServiceError", "MalformedInputError"]
