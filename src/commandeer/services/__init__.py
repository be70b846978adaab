"""Service layer — the Command base class and its Result contract.

Services may import from domain.
They must never import from commands, output, or config.
"""
