"""Expose the Oracle HCM tools and the bridge that publishes them."""

from .bridge import OracleHcmBridge
from .tools import OracleHcmTools

__all__ = ["OracleHcmBridge", "OracleHcmTools"]
