"""
Cloudant bridge.

Gateway nodes that turn flow messages into Cloudant/CouchDB document
operations and backend results back into flow messages.
"""

__version__ = "0.1.0"
