"""immo_edl - État des lieux comparison and deposit deduction engine.

This package contains the inventory (entry/exit) comparison core of the
property-management back office.

Modules:
    - core: Exceptions, logging, settings and legal reference constants
    - domain.models: Pydantic models for snapshots, comparisons and ledgers
    - domain.calculator: Rating scale, vétusté, comparator and deposit rules
    - domain.workflow: Snapshot state machine and ledger editing
    - application.services: Repository, orchestration and export services
"""

__version__ = "1.4.0"
