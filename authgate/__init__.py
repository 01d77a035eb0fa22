"""
Authgate - Authentication boundary for an API gateway

Turns a one-time OAuth sign-in into a rotating credential pair and turns
verified access tokens into internal trust headers for downstream services.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- All communication through defined interfaces

Modules:
- auth: Token lifecycle, signing, identity resolution
- storage: Exchange code and refresh token persistence
- userservice: User-profile service client
- middleware: Trust boundary filter
- api: Auth REST endpoints and cookie policy
- proxy: Downstream forwarding
- errors: Error codes and responses
"""

__version__ = "1.0.0"
