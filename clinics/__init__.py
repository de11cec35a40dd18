"""
Clinics module - Clinic tenants of the clinic management product.

This module handles:
- Self-registration and admin review (approve, reject, suspend)
- The CLINIC license issued on approval
- Per-clinic controls (quotas, feature flags, lock)
- Subscription status polled by the clinic software
"""
