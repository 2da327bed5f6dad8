"""
Establishment search.

Responsibilities:
- Query OpenStreetMap (Overpass) for nearby establishments and normalise
  their tag vocabulary into the closed Category set.
- Optionally query Google Places when an API key is configured.
- Orchestrate the full search: geocode, find places, attach prices.
"""
