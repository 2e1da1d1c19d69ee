"""
Encode raw P-256 keys as PEM containers and verify ES256 (VAPID) tokens.
"""
