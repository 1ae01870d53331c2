"""Domain layer: rules, rounding, registry lookup, and target shapes.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
