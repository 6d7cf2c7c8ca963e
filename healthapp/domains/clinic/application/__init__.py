"""
Clinic Application Layer

Use cases, ports and application services.
"""
