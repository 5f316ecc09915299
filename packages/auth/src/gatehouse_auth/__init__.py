"""Gatehouse Auth: credential issuance behind the auth task queue.

AuthCore registers accounts, checks logins, and issues/refreshes signed session
tokens. It is composed from a UserStore and a TokenSigner; the activities module
exposes it to other services as three Temporal activities.
"""
