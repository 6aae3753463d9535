"""
Application layer.

Services orchestrating core algorithms and boundary integrations per request.
"""
