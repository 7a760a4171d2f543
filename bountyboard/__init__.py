"""Task bounty service: an in-memory ledger of tasks and admins, bech32 test addresses, escrow records and an HTTP front end."""

__version__ = "0.1.0"