"""Capa HTTP (FastAPI).

Por qué un paquete aparte:
- Mantiene el Core y los adaptadores libres de detalles ASGI.
- La CLI (`serve`) y los tests construyen la app con `api.app.create_app`.
"""

__version__ = "0.1.0"
