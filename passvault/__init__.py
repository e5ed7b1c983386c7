"""
PassVault Password Manager

NOTICE:
This package keeps an in-memory view of a personal credential vault in sync
with its store. It is meant for personal use on devices you own or
administer. Passwords are never written to logs.
"""
