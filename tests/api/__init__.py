"""API tests package.

End-to-end tests for the auth endpoints using TestClient against a
throwaway SQLite database.
"""
