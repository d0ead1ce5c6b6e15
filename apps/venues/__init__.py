"""Venues app package.

Sports facilities listed by owners, their courts, moderation status and
the public discovery API.
"""
