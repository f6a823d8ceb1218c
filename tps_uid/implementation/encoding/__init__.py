"""Encoding reference implementation package.

This package provides reference implementations of the encoding
collaborators: raw deflate compression, the UTC clock, and the TPS string
formatter and time extractor.
"""

from .deflate import Deflate
from .timestamper import UtcTimestamper
from .tps import TpsFormatter, TpsTimeExtractor

__all__ = [
    "Deflate",
    "TpsFormatter",
    "TpsTimeExtractor",
    "UtcTimestamper",
]
