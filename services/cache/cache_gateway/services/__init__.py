"""Gateway services.

Services talk to the store, classify its outcome and log; routes only map
the result to HTTP.
"""
