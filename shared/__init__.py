"""
Shared Kernel

Base classes and utilities shared across the facility apps:
value objects, the unit of work, the message bus and row locking.
"""
