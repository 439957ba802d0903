"""Domain services for Hospeda.

Pure business rules: permission decisions, visibility filtering, review
aggregates, slugs and promotion evaluation. No I/O happens here.
"""
