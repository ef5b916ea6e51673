"""
Rating index package.

Raw (user, item, rating) observations are loaded into a RawTable and compacted
into a dual-indexed DatasetIndex that recommendation models query by user or
by item.
"""
