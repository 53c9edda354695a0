"""Connection-request social backend: profiles, requests and a discovery feed."""

__version__ = "1.0.0"
