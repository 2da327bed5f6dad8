"""
Location layer.

Responsibilities:
- Validate and resolve Brazilian postal codes (CEP) through ViaCEP.
- Geocode free-text addresses and city names through Nominatim.
- Compute great-circle distances between coordinates.
- Map device geolocation failures to user-facing messages.
"""
