"""Pricing app package.

Holds the admin-managed pricing rules and the engine that turns a set of
requested resources and a time window into a final price. Rules are
conditional on the day of week and the start hour of a booking and
either multiply the base cost or add a flat fee.
"""
