"""Domain layer for homeledger application.

Services are imported from their modules (e.g. `homeledger.domain.ledger`);
this package stays import-free so the database layer can load entities
without pulling the services in.
"""
