"""Reviews app package.

Ratings and comments players leave for venues after a completed booking.
"""
