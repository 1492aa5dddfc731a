"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- persistence/: SQLAlchemy models, database manager, repositories
- security/: bcrypt, JWT, refresh/reset tokens, AES-GCM encryption, TOTP
- email/: Notification adapters
- identity/: External identity verifier adapters
- enrichers/: User agent parsing
- logging/: structlog adapters

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
