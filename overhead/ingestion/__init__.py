"""
Data ingestion module for Overhead.

Handles fetching the zone feed, decoding its positional rows, and loading
the static reference tables.
"""

from overhead.ingestion.feed_client import BoundingBox, FeedClient, SessionCookie
from overhead.ingestion.feed_decoder import decode_feed
from overhead.ingestion.reference_data import MetadataResolver

__all__ = ['BoundingBox', 'FeedClient', 'SessionCookie', 'decode_feed', 'MetadataResolver']
