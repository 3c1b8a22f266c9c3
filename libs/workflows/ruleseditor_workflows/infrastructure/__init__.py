"""Storage provider implementations.

Providers are imported from their own modules so that a backend SDK is only
loaded when that backend is used.
"""
