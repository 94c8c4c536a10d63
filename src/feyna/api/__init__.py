"""
feyna.api

Reference FastAPI service built with feyna class routers.

Responsibilities:
- App factory wiring settings, logging, auth config and routers.
- Entrypoint for running the service under uvicorn.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Library users do not need this package; it exercises the routing layer end to end.
