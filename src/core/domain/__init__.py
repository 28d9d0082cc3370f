"""Modelos y entidades del dominio.

Por qué:
- Aquí viven el documento de versiones, las peticiones de edición y el entorno.
- El dominio no conoce HTTP ni la terminal: solo conceptos del problema.
"""
