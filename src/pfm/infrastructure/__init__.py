"""Infrastructure layer — the HTTP transport to pfd.

Every httpx exception is converted to a :class:`~pfm.infrastructure.errors.PfmError`
subclass here; nothing raw escapes this package.
"""
