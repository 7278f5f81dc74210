"""
Base service class.
Services hold the logic behind a controller and talk to integrations.
"""

from abc import ABC


class BaseService(ABC):
    """Base class for services."""
