"""
feyna.routing

Class-based routing package.

Responsibilities:
- Route/middleware metadata registry.
- Decorators that populate it.
- `Router` base class that turns it into FastAPI routes.
- Handler adaptation and error translation.
"""

# Package marker.
