"""Widgets of the account-ledger interface."""
