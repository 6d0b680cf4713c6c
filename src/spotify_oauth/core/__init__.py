"""Core of the authorization code flow: request, callback, token, exchange."""
