"""Endpoint modules; each exposes a `router` mounted in pindown.api.v1.router."""
