"""
Assistance Domain Layer

Entities, value objects, intake variants, domain services and events.
"""
