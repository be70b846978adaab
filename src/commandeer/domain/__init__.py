"""Domain layer — parameter specs, convertors, validators, and schemas.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
