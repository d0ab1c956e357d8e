"""Retrieval of event collections: upcoming, old, popular, organized and recurring.

Use the functions in event_collections.factory.
"""
