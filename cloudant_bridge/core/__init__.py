"""
Core domain logic: failure taxonomy, name normalization, document
sanitization and connection profile resolution.
"""
