from __future__ import annotations
from fastapi import Request

from jobsearch.crawlers.registry import SourceRegistry


def get_registry(request: Request) -> SourceRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        registry = SourceRegistry()
        request.app.state.registry = registry
    return registry
