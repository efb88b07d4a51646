"""Domain layer — command values and pfd request/response shapes.

No I/O. May be imported by every other layer.
"""
