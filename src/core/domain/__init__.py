"""Modelos del dominio: métodos de la API, keys, personajes y planes.

Por qué:
- Estructuras puras (Pydantic v2 y dataclasses congeladas).
- El dominio no conoce HTTP, ficheros ni la CLI.
"""
