"""PTA payment tracker API."""
