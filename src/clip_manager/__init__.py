"""Clip Manager: turn web pages, videos and social posts into storable clips."""
