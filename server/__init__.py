"""
Plaid API server.

Application package root. Request handling is built on FastAPI;
this package owns the pieces every route shares.

Layers:
    - core: Settings loaded from the environment.
    - integrations: Error shapes of upstream APIs (Plaid).
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, middleware, security, logging).
"""
