"""Core domain modules.

This package contains the building blocks of the trading-symbol service:

- types: symbol, deal and read-model records
- errors: typed failures surfaced to callers
- access: operator/viewer authorization gate
- symbols: symbol status state machine, limits and balances
- deals: open deal listing and closure
- service: per-request facade (authorize, then delegate)
- persistence: persistence boundary (interfaces)
- storage: in-memory and PostgreSQL implementations
- config / bootstrap: environment config and wiring
"""
