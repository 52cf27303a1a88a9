"""
Version 1 of the API: user registration, bookings and processing guides.
"""
