"""Messagely — trust and access-control core for a small messaging backend.

Users register, log in with a password, receive a signed identity token,
and exchange directed messages that only their participants may see.
"""

__version__ = "0.1.0"
