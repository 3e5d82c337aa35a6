"""Domain layer - core business objects and interfaces.

This layer contains:
- Domain entities (flights, bookings, profile)
- The error taxonomy and Ok/Err results
- Interfaces for the API client, session store, view and commands
"""
