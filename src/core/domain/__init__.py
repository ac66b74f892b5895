"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2) y la tabla de campos.
- El dominio no conoce HTTP, HTML ni la CLI: solo conceptos del problema.
"""
