"""Catalog app package.

Reference data for the bookable resources of the facility: courts and
coaches, which are exclusive (one confirmed booking per window), and
equipment, which is pooled up to ``total_quantity`` concurrent uses.
"""
