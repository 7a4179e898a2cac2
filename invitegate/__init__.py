"""invitegate - invitation-gated signup and role escalation."""

__version__ = "0.1.0"
