"""
Confirmations module - Confirmation Reconciler.

This module handles:
- Parsing provider notifications from the webhook and the redirect
- Idempotent order completion and license issuance
"""
