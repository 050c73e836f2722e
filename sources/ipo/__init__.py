"""
IPO data: date-based status classification, Chittorgarh scrape with a
static fallback, and the cached aggregation service served by the API.
"""
