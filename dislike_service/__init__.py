"""Dislike toggle service gated by provider-issued OAuth logins."""
