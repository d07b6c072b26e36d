"""
Admin user profile editor.

Composite edit-form engine for a user's identity, home address and
notification/privacy preferences, with role-gated fields, payload assembly,
an update round trip and server-error reconciliation.
"""

__version__ = "1.0.0"
