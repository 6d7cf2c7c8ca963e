"""
Core architecture components: domain base classes, dependency container and app wiring.
"""
