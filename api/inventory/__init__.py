"""
Read-only inventory lookups: listing, single item, bulk by id.
"""
