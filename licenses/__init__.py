"""
Licenses module - License Registry.

This module handles:
- License entity, key format and expiry
- Redemption and device binding under a configurable policy
- Device index for license recovery after a reinstall
"""
