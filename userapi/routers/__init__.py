"""
FastAPI routers grouped by resource.

Each module exposes an APIRouter that ``userapi.app.create_app`` includes.
Routers only translate between HTTP and the services.
"""
