"""ABOUTME: Data-access gateway for the ERP purchase ledger.
ABOUTME: Locates, connects to, validates and queries the Firebird database."""
