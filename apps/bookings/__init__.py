"""Bookings app package.

This app encapsulates the booking transaction: equipment inventory
checks, pricing and the atomic creation of a booking with its items,
plus cancellation with waitlist promotion. Court and coach overlaps are
rejected by a database constraint rather than by application checks.
"""
