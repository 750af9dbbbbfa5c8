"""
Core infrastructure for the front-end service: exceptions, error handlers,
logging and dependency wiring.
"""
