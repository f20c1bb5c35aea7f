"""
Action handlers: resolve parameters, call the domain API, shape the result.
"""
