"""Market data provider registry."""

from __future__ import annotations

from chartfeed.config import ProviderType
from chartfeed.providers.base import BaseBarProvider

# Lazy registry: actual classes imported on demand so the mock provider
# never pulls in the HTTP stack.
PROVIDER_CLASSES: dict[ProviderType, str] = {
    ProviderType.POLYGON: "chartfeed.providers.polygon.PolygonProvider",
    ProviderType.MOCK: "chartfeed.providers.mock.MockProvider",
}


def create_provider(
    provider_type: ProviderType,
    **kwargs,
) -> BaseBarProvider:
    """Instantiate a provider by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = PROVIDER_CLASSES[provider_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseBarProvider", "PROVIDER_CLASSES", "create_provider"]
