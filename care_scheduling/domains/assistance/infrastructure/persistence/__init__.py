"""
Assistance persistence adapters (in-memory and SQLAlchemy).
"""
