"""
Payments module - Payment ledger and checkout.

This module handles:
- Order entity and its pending -> completed transition
- Payment ledger service
- Checkout link creation through the payment provider
- License polling by order id
"""
