"""Route normalization."""

from pathmetrics.core.normalize.route_normalizer import RouteNormalizer

__all__ = ["RouteNormalizer"]
