"""
API Routes Package
"""
from . import (
    health,
    customers,
    payment_profiles,
    subscriptions,
    hosted_forms,
)
