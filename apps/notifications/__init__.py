"""Notification helpers.

Email delivery for the other domain apps. Calls are dispatched from Celery
tasks so request handlers never wait on the mail backend.
"""
