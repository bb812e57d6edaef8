"""
Name resolution: turn a free-form name query into a profile record plus
photo and resume locators.

See `resolve.py` for the matching and photo extension lookup rules.
"""
