"""Service layer: the recursive fixer and CLI-facing operations.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
