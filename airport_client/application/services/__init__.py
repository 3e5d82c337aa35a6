"""Application services module.

Core services shared by the use cases, independent of any presentation.
"""
from airport_client.application.services.authentication_service import AuthenticationService
from airport_client.application.services.collection_reconciler import (
    CollectionReconciler,
    EditScript,
    flight_reconciler,
    booking_reconciler,
)

__all__ = [
    "AuthenticationService",
    "CollectionReconciler",
    "EditScript",
    "flight_reconciler",
    "booking_reconciler",
]
