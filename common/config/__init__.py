"""
Configuration module - Base settings for MongoDB, JWT secrets, server and CORS.
"""

from common.config.base_settings import BaseAppSettings

__all__ = ["BaseAppSettings"]
