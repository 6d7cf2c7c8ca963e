"""
Clinic Domain

Appointment scheduling, prescriptions and notifications for a clinic.
"""
