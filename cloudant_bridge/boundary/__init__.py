"""
Boundary adapters: the Cloudant HTTP client and the flow-host seams.
"""
