"""Outbound adapters and instrumentation."""
