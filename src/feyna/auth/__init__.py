"""
feyna.auth

Authentication/authorization package.

Responsibilities:
- Bearer-token extraction and HS256 verification.
- FastAPI dependencies used as route middlewares (required/optional auth, role checks).
- Role hierarchy policy.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here knows about routers; `feyna.routing` decides which of these
# dependencies a route receives.
