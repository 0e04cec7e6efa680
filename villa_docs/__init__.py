"""
Villa Claudia guest document relay.

Collects guest identity documents for upcoming stays, relays them to the
booking store and the administrator, and reminds guests who have not uploaded.
"""

__version__ = "1.0.0"
__description__ = "Guest travel document upload relay and reminder job"
