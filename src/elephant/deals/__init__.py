"""Deal module -- travel deals offered to passengers.

Provides the DealModel table, the Deal schema used as request/response body,
and DealService for async CRUD.
"""
