"""
Domain layer - schedule entities and the store contract the engine reads through.
"""
