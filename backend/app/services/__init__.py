"""Services Layer — mesa lifecycle orchestration and its SQLAlchemy repository.

Invariants:
    - Services call core pure functions for every rule, then persist
    - Repository is the only module that issues SQL

Design Decisions:
    - Service depends on the MesaRepository Protocol, not the concrete class
      (fake repositories in tests, SQLAlchemy in production)
"""
