"""
Clinic Infrastructure Layer

SQLAlchemy persistence and the Redis notification bus.
"""
