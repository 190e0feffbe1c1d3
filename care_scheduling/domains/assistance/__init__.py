"""
Assistance Domain

Scheduling of professional consultations (psychology, social, legal, medical,
physiotherapy, nutrition) and the patient tracking records opened from them.
"""
