"""Match domain services: deck, judgment, turn resolution and room lifecycle.

Everything here works on in-memory ``Room`` objects and returns the
notifications to send, keeping transport concerns in the Socket.IO layer.
"""
