"""
Prompt packages for the LLM-backed stages of the recommender.
"""
