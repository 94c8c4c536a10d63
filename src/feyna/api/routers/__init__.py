"""
feyna.api.routers

Class-based routers mounted by `feyna.api.app.create_app`.
"""

# Package marker.
