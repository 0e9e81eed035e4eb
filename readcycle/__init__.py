"""ReadCycle.

A library lending service: members browse the catalogue, collect books in a
cart, borrow and return them; administrators curate the catalogue, manage
accounts, roles and permissions, flip maintenance mode and audit changes.

Core subpackages
----------------

- ``readcycle.core``:

  - Logging and optional Logfire monitoring.
  - The database layer: SQLModel entities, repositories, filter parsing and
    session management.
  - I/O models used by the HTTP API (request payloads and response envelopes).

- ``readcycle.server``:

  - The FastAPI application, its routers, middleware and exception handlers.
  - The service layer holding the lending, account and audit rules.
"""

__version__ = "1.0.0"
