"""
Core module: shared exceptions, value objects, domain events, caching,
observability middleware, health views and the scheduled expiry sweep.
"""
