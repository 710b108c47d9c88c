"""Passenger module -- travellers booked on deals."""
