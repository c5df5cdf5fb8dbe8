"""
Network operations module for HTTP client setup.
"""

from fios_stats.network.client import build_session, base_url

__all__ = ["build_session", "base_url"]
