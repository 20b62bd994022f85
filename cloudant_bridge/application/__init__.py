"""
Application layer: gateway services and the flow nodes composing them.
"""
