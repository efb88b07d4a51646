"""Service layer — dispatch and request translation returning CommandResult.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
