"""Servicios del Core: diff, selección de versión y sesión de edición.

Aquí vive la lógica del flujo; no conocen HTTP ni la terminal.
"""
