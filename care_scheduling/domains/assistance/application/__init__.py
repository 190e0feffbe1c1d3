"""
Assistance Application Layer

Ports, DTOs, lifecycle service, use cases and event handlers.
"""
