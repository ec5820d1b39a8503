"""
HTTP routes for the episode recommender.
"""
