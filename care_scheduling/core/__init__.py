"""
Core architecture components shared by every domain.
"""
