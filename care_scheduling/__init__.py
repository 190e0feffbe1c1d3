"""
Care Scheduling

Professional appointment scheduling engine for assistance programs:
availability, conflict detection, appointment lifecycle and
specialty tracking records.
"""

__version__ = "0.1.0"
