"""
Data-fetch layer: the Sheets API client, local file sources and the cached
table service used by the UI.
"""
