"""
Boundary layer for external system integrations.

Handles all interactions with the record store (SQLAlchemy) and the blob
store (S3). Driver errors are translated into the domain taxonomy here and
nowhere else.
"""
