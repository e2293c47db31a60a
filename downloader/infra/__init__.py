"""
Infrastructure: HTTP sessions, the aggregation API client, the media
relay, logging and metrics.
"""
