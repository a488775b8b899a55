#!/usr/bin/env python
"""Generate a secure signing key for the .env file."""

import secrets

print("=== Secure Key Generation ===\n")

print("SECRET_KEY (JWT):")
print(secrets.token_urlsafe(32))
print()

print("Add this to your .env file!")
