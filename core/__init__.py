"""
Shared kernel for the payment and license apps.

Holds the domain exception hierarchy, value objects and events, the
keyed lock and service container, and the HTTP middleware for
logging, metrics and rate limiting.
"""
