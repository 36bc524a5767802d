"""
MoodMatch Films - client package

This package contains the client-side logic of the recommendation app:
- preferences: wizard selections mirrored into the query string
- wizard: five-step sequencer that triggers the recommendation request
- debounce: trailing-debounce search with last-issued-wins results
- likes: liked-movie set reconciled between local cache and remote store
- pager: deduplicating, wraparound result pager
- api_client / catalog: HTTP clients for the backend and TMDB
"""
