"""External service connectors."""

from .discovery import DiscoveryConnector
from .vocadb import VocaDBConnector

__all__ = ["DiscoveryConnector", "VocaDBConnector"]
