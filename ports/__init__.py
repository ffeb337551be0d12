from .llm import LLMClientPort
from .repos import SearchStorePort
from .search_provider import SearchProviderPort
from .source import DiscoveryStrategyPort

__all__ = [
    "LLMClientPort",
    "SearchStorePort",
    "SearchProviderPort",
    "DiscoveryStrategyPort",
]
