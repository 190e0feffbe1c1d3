"""
Assistance Infrastructure Layer

Adapters implementing the application ports.
"""
