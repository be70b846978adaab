"""Infrastructure layer — locating command classes at runtime.

This layer depends on stdlib and the service layer's Command type.
It must never import from commands, output, or config.
"""
