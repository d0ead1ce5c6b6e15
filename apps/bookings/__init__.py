"""Bookings app package.

This app encapsulates the booking domain: the booking model, the slot
reservation rule and the booking lifecycle (cancel, complete). Reservations
serialize on a row lock of the court and are backed by a partial unique
index on confirmed bookings.
"""
