"""
API module for Overhead.

Provides the closest-flight endpoints (plain text and JSON).
"""

from overhead.api.closest import closest_bp

__all__ = ['closest_bp']
