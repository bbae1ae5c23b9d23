"""ABOUTME: clibdb package root.
ABOUTME: Gateway for reading the purchase ledger of an Aspel SAE Firebird database."""

__version__ = "0.1.0"
